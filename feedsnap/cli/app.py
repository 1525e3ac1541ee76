"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .build import build_command
from .sources import sources_app

app = typer.Typer(
    name="feedsnap",
    help="Aggregate company feeds and scraped news pages into one content snapshot",
    no_args_is_help=True,
)

# Register commands
app.command("build")(build_command)
app.add_typer(sources_app, name="sources", help="Inspect configured sources")


if __name__ == "__main__":
    app()
