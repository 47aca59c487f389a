#!/usr/bin/env python3
"""
Legacy Sheet CLI - state export/import and offline text extraction

Usage:
    legacy-sheet export [FILENAME]     # Export current state
    legacy-sheet import FILENAME       # Import state from file
    legacy-sheet parse TEXT_FILE       # Parse OCR text into person records
    legacy-sheet ocr IMAGE             # OCR an image, then parse it
    legacy-sheet serve                 # Run the development server
"""

import json
from datetime import datetime
from pathlib import Path

import click

from app import Config, main_cli
from legacy_sheet.services.exceptions import ServiceError
from legacy_sheet.services.extraction_service import ExtractionService
from legacy_sheet.services.ocr_service import OCRService
from legacy_sheet.services.state_service import StateService
from legacy_sheet.shared.legacy_sheet_parser import LegacySheetParser
from legacy_sheet.shared.logging_config import get_project_logger, set_project_verbosity


logger = get_project_logger(__name__)


def _format_saved_at(saved_at) -> str:
    if not saved_at:
        return 'unknown'
    try:
        return datetime.fromisoformat(str(saved_at).replace('Z', '+00:00')).strftime('%Y-%m-%d %H:%M:%S')
    except ValueError:
        return str(saved_at)


def _extraction_service(config: Config) -> ExtractionService:
    return ExtractionService(
        parser=LegacySheetParser(escape_markup=config.escape_prose),
        ocr_service=OCRService(language=config.ocr_language, tesseract_config=config.tesseract_config),
    )


def _echo_document(document, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(document.to_dict(), indent=2, ensure_ascii=False))
        return

    if document.is_empty:
        click.echo("No numbered entries found - nothing extracted.")
        return

    if document.generation_title:
        click.echo(f"Generation: {document.generation_title}")
    click.echo(f"Persons: {document.person_count}")
    for person in document.persons:
        name = person.name or '(no name detected)'
        click.echo(f"  {person.number}. {name} - {len(person.sub_paragraphs)} sub-paragraph(s)")


@click.group()
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, verbose):
    """Legacy Sheet - state and extraction tools"""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    ctx.obj.setdefault('config', Config())
    set_project_verbosity(verbose)


@cli.command('export')
@click.argument('filename', required=False)
@click.pass_context
def export_state(ctx, filename):
    """Export the current application state to a shareable file"""
    service = StateService(ctx.obj['config'].data_dir)

    try:
        summary = service.export_state(filename)
    except ServiceError as e:
        logger.error(f"Export failed: {e}")
        raise click.ClickException(f"Error exporting state: {e}")

    click.echo("\nState exported successfully!")
    click.echo(f"- File: {summary.path}")
    click.echo(f"- Pages: {summary.pages}")
    click.echo(f"- Saved on: {_format_saved_at(summary.saved_at)}")
    click.echo("\nShare this file with others to continue editing from where you left off.")


@cli.command('import')
@click.argument('filename')
@click.pass_context
def import_state(ctx, filename):
    """Import a state file, backing up the current state first"""
    service = StateService(ctx.obj['config'].data_dir)

    try:
        summary = service.import_state(filename)
    except ServiceError as e:
        logger.error(f"Import failed: {e}")
        raise click.ClickException(f"Error importing state: {e}")

    if summary.backup_path:
        click.echo(f"Created backup of current state: {summary.backup_path}")
    click.echo("\nState imported successfully!")
    click.echo(f"- Pages: {summary.pages}")
    click.echo(f"- Originally saved on: {_format_saved_at(summary.saved_at)}")
    click.echo("\nRun the application to continue editing from this state.")


@cli.command()
@click.argument('text_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--json', 'as_json', is_flag=True, help='Print the document as JSON')
@click.pass_context
def parse(ctx, text_file, as_json):
    """Parse an OCR text file into numbered person records"""
    service = _extraction_service(ctx.obj['config'])

    try:
        document = service.extract_document(text_file.read_text(encoding='utf-8'))
    except ServiceError as e:
        raise click.ClickException(str(e))

    _echo_document(document, as_json)


@cli.command()
@click.argument('image', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--json', 'as_json', is_flag=True, help='Print the document as JSON')
@click.pass_context
def ocr(ctx, image, as_json):
    """Run OCR over an image and parse the recognized text"""
    service = _extraction_service(ctx.obj['config'])

    def progress_callback(data):
        if not as_json:
            click.echo(f"[{data['progress']:>4.0%}] {data['status']}")

    try:
        result = service.extract_from_image(image, progress_callback)
    except ServiceError as e:
        raise click.ClickException(f"OCR failed: {e}")

    _echo_document(result.document, as_json)


@cli.command()
@click.option('--host', default='127.0.0.1', show_default=True, help='Interface to bind')
@click.option('--port', default=3000, show_default=True, type=int, help='Port to listen on')
def serve(host, port):
    """Run the development server (save/load state, parse, OCR)"""
    main_cli(host=host, port=port)


if __name__ == '__main__':
    cli()
