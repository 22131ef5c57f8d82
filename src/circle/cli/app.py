"""Main CLI application."""

import typer

from circle.cli.commands import doctor, init, serve, users

app = typer.Typer(
    name="circle",
    help="Circle - friends, feed and direct messages",
    no_args_is_help=True,
)

serve.register(app)
init.register(app)
users.register(app)
doctor.register(app)


if __name__ == "__main__":
    app()
