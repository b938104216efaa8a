import asyncio

from rich.console import Console

from sitelift.aws.s3.deployment import DeploymentOutcome
from sitelift.command_run import CommandRun

console = Console()


def print_operation_header(operation: str, app_name: str, environment: str) -> None:
    console.print(f"{operation} ", style="bold", end="")
    console.print(f"{app_name}", style="bold cyan", end="")
    console.print(" → ", style="dim", end="")
    console.print(f"{environment}", style="bold yellow")


def _print_outcome(outcome: DeploymentOutcome) -> None:
    changes = f"[dim]({outcome.file_change_count} files changed)[/dim]"
    if outcome.url is not None:
        console.print(f"[bold green]✓[/bold green] Deployed {outcome.url} {changes}")
    else:
        console.print(f"[bold green]✓[/bold green] Deployed {changes}")


def run_upload(env: str, website: str | None = None) -> None:
    status = console.status("Loading app...")
    status.start()
    try:
        with CommandRun(env) as run:
            status.stop()
            print_operation_header("Uploading", run.app_name, env)
            for static_website in run.websites(website):
                console.print(f"Deploying the static website '{static_website.name}'")
                with console.status("Resolving bucket...") as upload_status:
                    deployer = run.deployer(static_website, on_progress=upload_status.update)
                    outcome = asyncio.run(deployer.upload())
                _print_outcome(outcome)
    finally:
        status.stop()


def run_post_deploy(env: str) -> None:
    with CommandRun(env) as run:
        for static_website in run.websites():
            file_change_count = asyncio.run(run.deployer(static_website).post_deploy())
            console.print(
                f"Uploaded '{static_website.name}' [dim]({file_change_count} files changed)[/dim]"
            )


def run_pre_remove(env: str) -> None:
    with CommandRun(env) as run:
        for static_website in run.websites():
            deleted = asyncio.run(run.deployer(static_website).pre_remove())
            if deleted is None:
                console.print(f"No bucket found for '{static_website.name}', nothing to empty")
            else:
                console.print(
                    f"Emptied the bucket of '{static_website.name}' "
                    f"[dim]({deleted} files deleted)[/dim]"
                )


async def _website_outputs(run: CommandRun) -> dict[str, dict[str, str | None]]:
    outputs = {}
    for static_website in run.websites():
        deployer = run.deployer(static_website)
        url, cname = await asyncio.gather(deployer.url(), deployer.cname())
        outputs[static_website.name] = {"url": url, "cname": cname}
    return outputs


def run_outputs(env: str, json_output: bool = False) -> None:
    status = console.status("Loading app...")
    status.start()
    try:
        with CommandRun(env) as run:
            website_outputs = asyncio.run(_website_outputs(run))
            status.stop()
            if json_output:
                console.print_json(data=website_outputs)
                return
            print_operation_header("Outputs for", run.app_name, env)
            if not website_outputs:
                console.print(f"[yellow]No static website found in {run.app_name}[/yellow]")
            for name, values in website_outputs.items():
                console.print(f"[bold]{name}[/bold]")
                for key, value in values.items():
                    shown = value if value is not None else "[dim]not deployed yet[/dim]"
                    console.print(f"  [cyan]{key}[/cyan]: {shown}")
    finally:
        status.stop()
