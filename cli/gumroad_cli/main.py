from __future__ import annotations

import typer

from .commands import auth_cmd, config_cmd
from .commands.licenses_cmd import app as licenses_app
from .commands.products_cmd import app as products_app
from .commands.sales_cmd import app as sales_app
from .commands.subscribers_cmd import app as subscribers_app
from .commands.webhooks_cmd import app as webhooks_app
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="gumroad",
        help="Gumroad API command line client",
        no_args_is_help=True,
    )

    app.add_typer(config_cmd.app, name="config")
    app.command("whoami")(auth_cmd.whoami_impl)
    app.add_typer(products_app, name="products")
    app.add_typer(sales_app, name="sales")
    app.add_typer(licenses_app, name="licenses")
    app.add_typer(webhooks_app, name="webhooks")
    app.add_typer(subscribers_app, name="subscribers")

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
