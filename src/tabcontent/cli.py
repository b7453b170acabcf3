"""Click CLI for Tabcontent."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import click
import yaml
from trogon import tui

from tabcontent import __version__
from tabcontent.client import ContentFetchError, DepartmentsClient
from tabcontent.config import OUTPUT_FORMAT_OPTIONS, TabContentConfig
from tabcontent.models import TAB_LABELS, RawTabContent, TabType
from tabcontent.page import DepartmentPage
from tabcontent.parsers import classify, coerce_entries, normalize
from tabcontent.resolver import resolve
from tabcontent.selection import ActiveSelection


TAB_CHOICES = [t.value for t in TabType]
FORMAT_CHOICES = [value for value, _ in OUTPUT_FORMAT_OPTIONS]


def load_document(path: Path) -> Any:
    """Load a JSON or YAML document (YAML is a superset, so both parse)."""
    content = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        return json.loads(content)
    return yaml.safe_load(content)


def load_tab_content(path: Path, tab_type: Optional[str]) -> RawTabContent:
    """Read a tab content document; a bare list is treated as its sidebar_items."""
    try:
        data = load_document(path)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        click.echo(f"Error: Could not parse {path}: {e}", err=True)
        raise SystemExit(1)

    if not isinstance(data, dict):
        data = {"sidebar_items": data}
    content = RawTabContent.from_payload(data)
    if tab_type:
        content.tab_type = tab_type
    return content


def dump(data: Any, fmt: str) -> str:
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    return json.dumps(data, indent=2, ensure_ascii=False)


@tui()
@click.group()
@click.version_option(version=__version__, prog_name="tabcontent")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Tabcontent - department tab content normalization tool.

    Normalize legacy sidebar data and preview what a tab will display.

    Quick start:
        tabcontent normalize tab.json -t opd_services
        tabcontent resolve tab.json -t overview -s item_2
        tabcontent fetch 12 --tab investigations
        tabcontent tab-types
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = TabContentConfig.load()


@cli.command("normalize")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--tab-type", "-t", type=click.Choice(TAB_CHOICES), help="Override the document's tab type")
@click.option("--overview/--no-overview", default=None, help="Prepend a synthetic Overview entry")
@click.option("--format", "-f", "fmt", type=click.Choice(FORMAT_CHOICES), help="Output format")
@click.pass_obj
def normalize_cmd(
    config: TabContentConfig,
    path: Path,
    tab_type: Optional[str],
    overview: Optional[bool],
    fmt: Optional[str],
) -> None:
    """Print the normalized sidebar items of a tab content file.

    PATH is a JSON/YAML tab content record, or a bare list of sidebar entries.
    """
    content = load_tab_content(path, tab_type)
    include_overview = config.include_overview if overview is None else overview
    items = normalize(content.sidebar_items, include_overview, content.tab_type)
    click.echo(dump([item.model_dump() for item in items], fmt or config.output_format))


@cli.command("resolve")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--tab-type", "-t", type=click.Choice(TAB_CHOICES), help="Override the document's tab type")
@click.option("--select", "-s", "item_id", help="Sidebar item id (default: Overview)")
@click.option("--overview/--no-overview", default=None, help="Prepend a synthetic Overview entry")
@click.option("--format", "-f", "fmt", type=click.Choice(FORMAT_CHOICES), help="Output format")
@click.pass_obj
def resolve_cmd(
    config: TabContentConfig,
    path: Path,
    tab_type: Optional[str],
    item_id: Optional[str],
    overview: Optional[bool],
    fmt: Optional[str],
) -> None:
    """Print the content a tab displays for a selection."""
    content = load_tab_content(path, tab_type)
    include_overview = config.include_overview if overview is None else overview
    items = normalize(content.sidebar_items, include_overview, content.tab_type)
    selection = ActiveSelection.for_item(item_id)
    resolved = resolve(selection, items, content)
    click.echo(dump(resolved.model_dump(mode="json"), fmt or config.output_format))


@cli.command("classify")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def classify_cmd(path: Path) -> None:
    """Show the detected shape of each raw sidebar entry."""
    content = load_tab_content(path, None)
    entries = coerce_entries(content.sidebar_items)
    if not entries:
        click.echo("No sidebar entries.")
        return

    for index, value in enumerate(entries):
        entry = classify(value, index)
        preview = json.dumps(value, ensure_ascii=False, default=str)
        if len(preview) > 60:
            preview = preview[:57] + "..."
        click.echo(f"  [{index}] {entry.tag.value:<20} {preview}")


@cli.command("fetch")
@click.argument("department_id", type=int)
@click.option("--tab", "-t", "tab_type", type=click.Choice(TAB_CHOICES), help="Only show this tab")
@click.option("--base-url", "-u", help="API base URL (default: from config)")
@click.option("--overview/--no-overview", default=None, help="Prepend a synthetic Overview entry")
@click.pass_obj
def fetch_cmd(
    config: TabContentConfig,
    department_id: int,
    tab_type: Optional[str],
    base_url: Optional[str],
    overview: Optional[bool],
) -> None:
    """Fetch a department and preview its tabs."""
    if base_url:
        config.api_base_url = base_url
    include_overview = config.include_overview if overview is None else overview

    with DepartmentsClient.from_config(config) as client:
        try:
            department = client.get_department_with_tabs(department_id)
        except ContentFetchError as e:
            click.echo(f"Error fetching department: {e}", err=True)
            raise SystemExit(1)

    click.echo(f"\n🏥 {department.name} (#{department.id})")
    click.echo("=" * 50)

    page = DepartmentPage(department, include_overview=include_overview)
    tabs = [TabType(tab_type)] if tab_type else [t for t in TabType if t.has_tab_content]
    for tab in tabs:
        page.select_tab(tab)
        click.echo(f"\n  {tab.label}")
        if page.current_content() is None:
            click.echo("    No content available for this tab.")
            continue

        for item in page.sidebar():
            click.echo(f"    • {item.title} [{item.id}]")

        resolved = page.content()
        if resolved.description:
            desc = resolved.description
            desc = desc[:60] + "..." if len(desc) > 60 else desc
            click.echo(f"    {desc}")
        if resolved.image:
            click.echo(f"    Image: {resolved.image}")
        for service in resolved.service_list:
            click.echo(f"    {service.title or 'Services'}: {len(service.items)} item(s)")


@cli.command("tab-types")
def tab_types() -> None:
    """List tab types and whether they embed their own Overview entry."""
    for tab, label in TAB_LABELS.items():
        notes = []
        if tab.embeds_overview:
            notes.append("embedded overview")
        if not tab.has_tab_content:
            notes.append("no tab content")
        note_str = f" ({', '.join(notes)})" if notes else ""
        click.echo(f"  {tab.value:<20} {label}{note_str}")


@cli.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to")
@click.option("--port", default=8000, help="Port to bind to")
@click.option("--reload", is_flag=True, help="Enable auto-reload")
def serve(host: str, port: int, reload: bool) -> None:
    """Start the Tabcontent preview API server."""
    import uvicorn

    click.echo(f"Starting Tabcontent API server at http://{host}:{port}")
    click.echo("Press Ctrl+C to stop")
    uvicorn.run(
        "tabcontent.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )


# =============================================================================
# Config Commands
# =============================================================================


@cli.group("config")
def config_group() -> None:
    """View and change persistent settings."""
    pass


@config_group.command("show")
@click.pass_obj
def config_show(config: TabContentConfig) -> None:
    """Show the current configuration."""
    click.echo(f"Config file: {TabContentConfig.get_config_path()}")
    for key, value in vars(config).items():
        click.echo(f"  {key}: {value}")


@config_group.command("set")
@click.option("--api-url", help="Departments API base URL")
@click.option("--overview/--no-overview", default=None, help="Synthesize Overview entries by default")
@click.option("--format", "-f", "fmt", type=click.Choice(FORMAT_CHOICES), help="Default output format")
@click.pass_obj
def config_set(
    config: TabContentConfig,
    api_url: Optional[str],
    overview: Optional[bool],
    fmt: Optional[str],
) -> None:
    """Update persistent settings."""
    if api_url:
        config.api_base_url = api_url
    if overview is not None:
        config.include_overview = overview
    if fmt:
        config.output_format = fmt
    config.save()
    click.echo("✓ Configuration saved")


@config_group.command("reset")
@click.pass_obj
def config_reset(config: TabContentConfig) -> None:
    """Reset settings to defaults."""
    config.reset()
    config.save()
    click.echo("✓ Configuration reset")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
