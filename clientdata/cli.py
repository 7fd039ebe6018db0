import click, logging, json
from dotenv import load_dotenv

from .tools.asset_loader import ASSET_NAME, PRESERVE_ENV, env_flag, read_asset

load_dotenv()


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug output.")
def cli(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(message)s",
    )


def _read_or_exit(name, root, **kw):
    try:
        return read_asset(name, root, **kw)
    except RuntimeError as exc:
        logging.debug("read of %s failed", name, exc_info=True)
        click.echo(f"Failed to read asset '{name}': {exc}", err=True)
        raise SystemExit(1)


@cli.command()
@click.option("--name", "-n", default=ASSET_NAME, show_default=True, help="Asset file name.")
@click.option(
    "--root",
    "-r",
    type=click.Path(file_okay=False),
    help="Directory holding the assets (defaults to the bundled ones).",
)
@click.option("--preserve-newlines", is_flag=True, help="Return the exact text, newlines included.")
def read(name, root, preserve_newlines):
    """Print the contents of a bundled asset."""
    exact = preserve_newlines or env_flag(PRESERVE_ENV)
    text = _read_or_exit(name, root, preserve_newlines=exact)
    click.echo(text, nl=not exact)


@cli.command("client-name")
@click.option("--name", "-n", default=ASSET_NAME, show_default=True, help="Asset file name.")
@click.option("--root", "-r", type=click.Path(file_okay=False), help="Directory holding the assets.")
def client_name(name, root):
    """
    Read the client config asset, parse it as JSON and print its
    `client_name` field.
    """
    text = _read_or_exit(name, root)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        click.echo(f"Asset '{name}' is not valid JSON: {exc}", err=True)
        raise SystemExit(1)

    value = data.get("client_name") if isinstance(data, dict) else None
    if not value:
        click.echo(f"Asset '{name}' has no client_name", err=True)
        raise SystemExit(1)
    click.echo(value)


if __name__ == "__main__":
    cli()
