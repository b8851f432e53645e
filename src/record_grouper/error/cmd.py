import functools
from typing import Callable

import click
from rich.console import Console

from record_grouper.error.exceptions import GroupingError, InputError, OutputError

console = Console()


def handle_command_errors(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (InputError, FileNotFoundError) as e:
            console.print(f"[red]Input error:[/red] {e}", highlight=False)
            raise click.Abort()
        except GroupingError as e:
            console.print(f"[red]Grouping failed:[/red] {e}", highlight=False)
            raise click.Abort()
        except OutputError as e:
            console.print(f"[red]Output error:[/red] {e}", highlight=False)
            raise click.Abort()
        except ValueError as e:
            console.print(f"[red]Error:[/red] {e}", highlight=False)
            raise click.Abort()
        except Exception as e:
            console.print(f"[red]Unexpected error:[/red] {e}", highlight=False)
            raise click.Abort()

    return wrapper
