"""Configuration management commands."""

import typer

from habo_data.models import ENTITY_FAMILIES
from habo_data.services.config_service import get_config_service
from habo_data.utils.typer_helpers import SuggestingGroup
from habo_data.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")


@app.command("show")
@command_wrapper
def show_config(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Show the current configuration and where each family is stored."""
    config_service = get_config_service()
    config = config_service.config
    result = {
        "config_file": str(config_service.config_path),
        "database": config_service.db_path,
        "endpoint": config.api.endpoint,
        "user_id": config.api.user_id,
        "timeout": config.api.timeout,
    }
    for family in ENTITY_FAMILIES:
        result[family] = config.storage.backend_for(family)
    format_output(result, output)


@app.command("use")
@command_wrapper
def use_storage(
    family: str = typer.Argument(..., help=f"Entity family ({', '.join(ENTITY_FAMILIES)})"),
    storage_type: str = typer.Argument(..., help="local or remote"),
) -> None:
    """Switch an entity family between local and remote storage."""
    get_config_service().set_storage(family, storage_type)
    format_success(f"{family} now use {storage_type} storage")
