"""CLI entrypoint: Typer app definition and command registration"""

import typer

from snipbin.cli.commands import delete_cmd, get_cmd, init_cmd, name_cmd, put_cmd


app = typer.Typer(name="snipbin", no_args_is_help=True, help="Encrypted text snippet store")

app.command(name="init")(init_cmd)
app.command(name="put")(put_cmd)
app.command(name="get")(get_cmd)
app.command(name="delete")(delete_cmd)
app.command(name="name")(name_cmd)
