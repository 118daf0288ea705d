"""
Command-line interface for anon-feedback.

Usage:
    anon-feedback serve                       # Run the web application
    anon-feedback check-route /sign-in        # Show the route guard decision
    anon-feedback check-route /admin/dashboard --signed-in
"""

import click

from anon_feedback.config.settings import get_settings
from anon_feedback.observability.logging import get_logger, setup_logging
from anon_feedback.routing.guard import decide, is_matched_path


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, debug: bool) -> None:
    """Anonymous Feedback - dashboard and session-gated pages."""
    ctx.obj = {"debug": debug or get_settings().debug}
    setup_logging(debug=ctx.obj["debug"])


@main.command()
@click.option("--host", default=None, help="Server host")
@click.option("--port", default=None, type=int, help="Server port")
@click.option("--reload", is_flag=True, help="Enable auto-reload (dev only)")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None, reload: bool) -> None:
    """Start the web application."""
    import uvicorn

    settings = get_settings()
    debug = ctx.obj["debug"]
    host = host or settings.api_host
    port = port or settings.api_port

    click.echo(f"Starting Anonymous Feedback on {host}:{port}")
    click.echo(f"API docs available on http://localhost:{port}/docs")

    uvicorn.run(
        "anon_feedback.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level="debug" if debug else "info",
        log_config=None,
        access_log=debug,
    )


@main.command("check-route")
@click.argument("path")
@click.option("--signed-in", is_flag=True, help="Evaluate as if a session token is present")
def check_route(path: str, signed_in: bool) -> None:
    """Show what the route guard does with PATH."""
    if not is_matched_path(path):
        click.echo(f"{path}: not guarded (pass)")
        return

    decision = decide(path, has_token=signed_in)
    get_logger(__name__).debug("Route guard evaluated", path=path, action=decision.action.value)
    if decision.is_redirect:
        click.echo(f"{path}: {decision.action.value} -> {decision.location}")
    else:
        click.echo(f"{path}: pass")


if __name__ == "__main__":
    main()
