import click

from .. import __version__
from .cli_settings import config, config_files, password
from .cli_statements import exec_, query


@click.group(help="Run SQL statements against a MySQL database.")
@click.option(
    "-v", "--verbose", is_flag=True, help="Print debug log messages to stderr."
)
@click.version_option(version=__version__, message="%(version)s")
def main(verbose: bool) -> None:
    pass


main.add_command(exec_)
main.add_command(query)
main.add_command(config)
main.add_command(config_files)
main.add_command(password)
