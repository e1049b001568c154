"""
Command-line interface for the GotSport mirror.
Usage examples:
  python -m gotsport_mirror.apps.cli snapshot --group 431414 --refresh
  python -m gotsport_mirror.apps.cli home --group 431414 --division U14
  python -m gotsport_mirror.apps.cli fixtures --group 431414
  python -m gotsport_mirror.apps.cli roster --refresh
  python -m gotsport_mirror.apps.cli resolve 3499548
  python -m gotsport_mirror.apps.cli divisions
"""

import asyncio
import json
from typing import Any, Awaitable, Callable, Optional

import click

from ..cache.manager import CacheManager, create_store
from ..common.errors import ScraperError
from ..common.logging_utils import configure_logging, get_logger
from ..core.config import Settings
from ..data_collection.orchestrator import GotSportOrchestrator

logger = get_logger(__name__)


def _build_orchestrator(cfg: Settings) -> GotSportOrchestrator:
    cache = CacheManager(create_store(cfg), prefix=cfg.cache_key_prefix)
    return GotSportOrchestrator(cache=cache, settings=cfg)


def _run(cfg: Settings, job: Callable[[GotSportOrchestrator], Awaitable[Any]]) -> None:
    """Run *job* against a fresh orchestrator and print its result as JSON."""

    async def _main() -> Any:
        orch = _build_orchestrator(cfg)
        try:
            return await job(orch)
        finally:
            await orch.cleanup()

    try:
        result = asyncio.run(_main())
    except ScraperError as e:
        logger.error("%s", e)
        raise SystemExit(1)
    click.echo(json.dumps(result, indent=2, ensure_ascii=False))


@click.group()
@click.option("--event", "event_id", default=None, help="GotSport event id (default: settings.event_id)")
@click.pass_context
def cli(ctx: click.Context, event_id: Optional[str]):
    cfg = Settings()
    if event_id:
        cfg = cfg.model_copy(update={"event_id": event_id})
    configure_logging(service="gotsport-mirror", level=cfg.log_level, fmt=cfg.log_format)
    ctx.obj = cfg


@cli.command()
@click.option("--group", "group_id", required=True, help="Group id of the division")
@click.option("--team", "team_id", default=None, help="Use this team's schedule for fixtures")
@click.option("--refresh", is_flag=True, help="Ignore the cached snapshot")
@click.pass_obj
def snapshot(cfg: Settings, group_id: str, team_id: Optional[str], refresh: bool):
    """Standings, results, fixtures and crests for a group"""

    async def job(orch: GotSportOrchestrator):
        result = await orch.load_group_snapshot(group_id, team_id, refresh=refresh)
        data = result.snapshot.to_json_dict()
        data["updatedAt"] = result.updated_at
        data["fromCache"] = result.from_cache
        return data

    _run(cfg, job)


@cli.command()
@click.option("--group", "group_id", required=True, help="Group id of the division")
@click.pass_obj
def fixtures(cfg: Settings, group_id: str):
    """Scrape every fixture of a group across all dates"""

    async def job(orch: GotSportOrchestrator):
        return [f.to_json_dict() for f in await orch.scrape_fixtures_only(group_id)]

    _run(cfg, job)


@cli.command()
@click.option("--refresh", is_flag=True, help="Ignore the cached roster")
@click.pass_obj
def roster(cfg: Settings, refresh: bool):
    """List the club's teams with their team ids"""

    async def job(orch: GotSportOrchestrator):
        return [t.to_json_dict() for t in await orch.get_roster(refresh=refresh)]

    _run(cfg, job)


@cli.command()
@click.argument("team_id")
@click.pass_obj
def resolve(cfg: Settings, team_id: str):
    """Resolve the group id a team plays in"""

    async def job(orch: GotSportOrchestrator):
        group_id = await orch.resolver.require_group_id_for_team(team_id, orch.event_id)
        return {"teamId": team_id, "groupId": group_id}

    _run(cfg, job)


@cli.command()
@click.option("--group", "group_id", required=True, help="Group id of the division")
@click.option("--division", required=True, help="Division label as it appears in team names, e.g. U14")
@click.option("--refresh", is_flag=True, help="Ignore the cached snapshot")
@click.pass_obj
def home(cfg: Settings, group_id: str, division: str, refresh: bool):
    """Club standing, next fixture, last result and upcoming fixtures"""

    def dump(model):
        return model.to_json_dict() if model is not None else None

    async def job(orch: GotSportOrchestrator):
        summary = await orch.home_summary(group_id, division, refresh=refresh)
        return {
            "teamName": summary.team_name,
            "standing": dump(summary.standing),
            "nextFixture": dump(summary.next_fixture),
            "lastResult": dump(summary.last_result),
            "upcoming": [f.to_json_dict() for f in summary.upcoming],
        }

    _run(cfg, job)


@cli.command()
@click.pass_obj
def divisions(cfg: Settings):
    """Map division labels to group ids from the event page"""

    async def job(orch: GotSportOrchestrator):
        return await orch.divisions()

    _run(cfg, job)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
