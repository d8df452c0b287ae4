"""CLI entry point for postman-markdown."""

from pathlib import Path

import click

from postman_markdown.errors import PostmanMarkdownError
from postman_markdown.log import configure_logging
from postman_markdown.parser.detect import detect_format
from postman_markdown.parser.postman import load_collection
from postman_markdown.renderer.markdown import render_markdown
from postman_markdown.writer import write_markdown


@click.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", type=click.Path(file_okay=False, path_type=Path), envvar="POSTMAN_MARKDOWN_OUTPUT", default=None, help="Directory for the generated Markdown file.")
@click.option("-n", "--name", default=None, help="Output file name without extension. Defaults to the collection name.")
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the document instead of writing a file.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(doc_path: Path, output: Path | None, name: str | None, to_stdout: bool, verbose: bool):
    """Generate Markdown documentation from a Postman collection."""
    configure_logging(verbose)

    if detect_format(doc_path) != "postman":
        click.echo(f"Warning: {doc_path} does not look like a Postman collection.", err=True)

    try:
        collection = load_collection(doc_path)
        markdown = render_markdown(collection)

        if to_stdout:
            click.echo(markdown, nl=False)
            return

        file_name = name or _file_stem(collection.info.name) or doc_path.stem
        file_path = write_markdown(markdown, file_name, output)
    except PostmanMarkdownError as e:
        raise click.ClickException(str(e)) from e

    click.secho(f"Documentation was created correctly {file_path}", fg="green")


def _file_stem(collection_name: str | None) -> str | None:
    """Keep a collection name like `Billing/v2` from creating subdirectories."""
    if not collection_name:
        return None
    return collection_name.replace("/", "-").replace("\\", "-")


if __name__ == "__main__":
    main()
