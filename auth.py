"""Airtable credential status reporting."""

from rich.console import Console

from core.config import API_KEY_ENV, Config, load_config

console = Console()


def mask_key(api_key: str) -> str:
    """Short, non-reversible preview of a token."""
    if len(api_key) <= 10:
        return "***"
    return api_key[:3] + "..." + api_key[-4:]


def check_auth(config: Config) -> bool:
    """Check if an Airtable token is configured."""
    api_key = config.airtable.api_key
    if api_key:
        console.print(f"[green]API key configured[/green] ({mask_key(api_key)})")
        return True
    console.print("[yellow]API key not configured[/yellow]")
    console.print(f"\n[dim]Set the[/dim] {API_KEY_ENV} [dim]environment variable:[/dim]")
    console.print(f"  export {API_KEY_ENV}=pat...")
    return False


def print_auth_status() -> None:
    check_auth(load_config())


def main():
    """CLI entry point for auth check."""
    print_auth_status()


if __name__ == "__main__":
    main()
