"""
Tests for shared data models
"""

import dataclasses

import pytest

from legacy_sheet.shared.models import GenealogyDocument, Person


class TestPerson:
    """Test Person derived fields"""

    def test_derived_from_raw_text(self):
        person = Person(number='2', name='Karin Holm', raw_text='2. Karin Holm was born.\n\nKarin married Per.')
        assert person.main_paragraph_markup == '<strong>Karin Holm</strong> was born.'
        assert person.sub_paragraphs == ('Karin married Per.',)

    def test_name_not_on_first_line(self):
        """Test a name that does not match the first line is not emphasized"""
        person = Person(number='1', name='Someone Else', raw_text='1. Anna Berg born 1900.')
        assert person.main_paragraph_markup == 'Anna Berg born 1900.'

    def test_immutable(self):
        person = Person(number='1', name='Anna', raw_text='1. Anna')
        with pytest.raises(dataclasses.FrozenInstanceError):
            person.name = 'Erik'

    def test_to_dict(self):
        person = Person(number='1', name='Anna Berg', raw_text='1. Anna Berg born 1900.\n\nAnna married.')
        assert person.to_dict() == {
            'number': '1',
            'name': 'Anna Berg',
            'rawText': '1. Anna Berg born 1900.\n\nAnna married.',
            'mainParagraphMarkup': '<strong>Anna Berg</strong> born 1900.',
            'subParagraphs': ['Anna married.'],
        }


class TestGenealogyDocument:
    """Test GenealogyDocument"""

    def test_empty_document(self):
        document = GenealogyDocument()
        assert document.is_empty
        assert document.person_count == 0
        assert document.to_dict() == {'generationTitle': '', 'persons': []}

    def test_to_dict_keeps_order(self):
        persons = (Person(number='5', raw_text='5. b'), Person(number='3', raw_text='3. a'))
        document = GenealogyDocument(generation_title='Second Generation', persons=persons)
        data = document.to_dict()
        assert data['generationTitle'] == 'Second Generation'
        assert [p['number'] for p in data['persons']] == ['5', '3']
        assert document.person_count == 2
