import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, Progress, TextColumn

from wsucrypt_core.blocks import read_key
from wsucrypt_core.errors import WSUCryptError
from wsucrypt_core.file_cipher import DEFAULT_OUTPUT, FileCipher
from wsucrypt.wsu import Mode

app = typer.Typer(help="WSU-CRYPT 64-bit block cipher")

TextArgument = typer.Argument(..., help="Plaintext file (encrypt) or hex ciphertext file (decrypt)")
KeyArgument = typer.Argument(
    ..., envvar="WSU_CRYPT_KEY_FILE", help="File holding the 64-bit key as 16 hex digits"
)
OutputOption = typer.Option(
    None, "--output", "-o", help="Output file (default: ciphertext.txt / plaintext.txt)"
)
ForceOption = typer.Option(False, "--force", "-f", help="Overwrite an existing output file")
JobsOption = typer.Option(1, "--jobs", "-j", min=1, help="Worker threads for block processing")
StripOption = typer.Option(
    False, "--strip-padding", help="Drop trailing NUL padding from decrypted plaintext"
)
VerboseOption = typer.Option(
    0,
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v: progress, -vv: per-round cipher trace)",
)


def setup_logging(verbose: int = 0):
    """Set up Rich logging."""
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbose, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _run(text: Path, key: Path, mode: Mode, output, force: bool, jobs: int, strip: bool):
    dst = output or Path(DEFAULT_OUTPUT[mode])
    console = Console(stderr=True)
    try:
        with Progress(
            TextColumn("[bold]{task.description}"),
            BarColumn(),
            TextColumn("{task.percentage:>3.0f}%"),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("encrypting" if mode == Mode.ENCRYPT else "decrypting", total=1.0)
            result = FileCipher(
                text,
                dst,
                read_key(key),
                mode,
                lambda f: progress.update(task, completed=f),
                overwrite=force,
                strip_padding=strip,
                jobs=jobs,
            ).run()
    except WSUCryptError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Output: {result}")


@app.callback()
def main_callback(verbose: int = VerboseOption):
    setup_logging(verbose)


@app.command()
def encrypt(
    text: Path = TextArgument,
    key: Path = KeyArgument,
    output: Path = OutputOption,
    force: bool = ForceOption,
    jobs: int = JobsOption,
):
    """Encrypt a plaintext file into hex ciphertext."""
    _run(text, key, Mode.ENCRYPT, output, force, jobs, False)


@app.command()
def decrypt(
    text: Path = TextArgument,
    key: Path = KeyArgument,
    output: Path = OutputOption,
    force: bool = ForceOption,
    jobs: int = JobsOption,
    strip_padding: bool = StripOption,
):
    """Decrypt a hex ciphertext file back into raw bytes."""
    _run(text, key, Mode.DECRYPT, output, force, jobs, strip_padding)


@app.command("run")
def run_mode(
    text: Path = TextArgument,
    key: Path = KeyArgument,
    mode: Mode = typer.Argument(..., help="'e' for encrypt, 'd' for decrypt"),
    output: Path = OutputOption,
    force: bool = ForceOption,
):
    """Original three-argument form: TEXT KEY e|d."""
    _run(text, key, mode, output, force, 1, False)


def main():
    app()


if __name__ == "__main__":
    main()
