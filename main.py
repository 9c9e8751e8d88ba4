"""CLI entry point for resume normal-mode scoring and job-fetch configs."""

import argparse
import asyncio
import logging
import sys

from src.core.config import Settings
from src.core.db import init_db
from src.jobs.invoker import HttpSyncInvoker
from src.jobs.schemas import NewJobFetchConfig
from src.jobs.search_config import (
    format_search_config_for_display,
    generate_default_search_config,
    popular_actor_ids,
    validate_search_config,
)
from src.jobs.service import JobConfigService

DEFAULT_CONFIG = "config/settings.yaml"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    # Shared flags, accepted after any subcommand.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        default=DEFAULT_CONFIG,
        help=f"Path to settings YAML file (default: {DEFAULT_CONFIG})",
    )
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    parser = argparse.ArgumentParser(
        description="Resume normal-mode scoring and job-fetch configuration tools",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- assess ---
    assess_parser = subparsers.add_parser(
        "assess", parents=[common], help="Assess and adjust a resume score",
    )
    assess_parser.add_argument("--resume", required=True, help="Resume file (.pdf, .txt, .md)")
    assess_parser.add_argument("--data", help="Structured resume data (YAML or JSON)")
    assess_parser.add_argument(
        "--base-score",
        type=float,
        required=True,
        help="Base score (0-100) computed by the upstream scorer",
    )
    assess_parser.add_argument(
        "--level",
        help="Candidate level: fresher, junior, mid, senior (default from settings)",
    )
    assess_parser.add_argument(
        "--with-jd",
        action="store_true",
        help="A job description was used to compute the base score",
    )
    assess_parser.add_argument(
        "--export",
        choices=["json"],
        help="Export the full result (json)",
    )

    # --- configs ---
    # Shared flags go on the leaf parsers only; a parent copy would reset them.
    configs_parser = subparsers.add_parser("configs", help="Manage job-fetch configurations")
    configs_sub = configs_parser.add_subparsers(dest="action", required=True)
    configs_sub.add_parser("list", parents=[common], help="List configurations")
    create_parser = configs_sub.add_parser(
        "create", parents=[common], help="Create a configuration with platform defaults",
    )
    create_parser.add_argument("--name", required=True)
    create_parser.add_argument("--platform", required=True)
    create_parser.add_argument("--actor-id", help="Actor id (default: known actor for platform)")
    toggle_parser = configs_sub.add_parser(
        "toggle", parents=[common], help="Activate or deactivate a configuration",
    )
    toggle_parser.add_argument("config_id")
    toggle_parser.add_argument("--off", action="store_true", help="Deactivate instead")
    delete_parser = configs_sub.add_parser(
        "delete", parents=[common], help="Delete a configuration",
    )
    delete_parser.add_argument("config_id")

    # --- sync ---
    sync_parser = subparsers.add_parser(
        "sync", parents=[common], help="Trigger a remote sync for a configuration",
    )
    sync_parser.add_argument("config_id")

    # --- stats ---
    subparsers.add_parser("stats", parents=[common], help="Show aggregate sync statistics")

    # --- test-connection ---
    conn_parser = subparsers.add_parser(
        "test-connection", parents=[common], help="Check Apify API token and actor id",
    )
    conn_parser.add_argument("--actor-id", required=True)

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(path: str) -> Settings:
    """Load settings, falling back to defaults when the default file is absent."""
    try:
        return Settings.from_yaml(path)
    except FileNotFoundError:
        if path != DEFAULT_CONFIG:
            raise
        return Settings()


def cmd_assess(args: argparse.Namespace, settings: Settings) -> None:
    """Handle the assess subcommand."""
    from src.pipeline.orchestrator import NormalModeInput, export_result_json, score_normal_mode
    from src.resume.extractor import load_resume_text
    from src.resume.schema import ResumeData

    text = load_resume_text(args.resume)
    data = ResumeData.from_file(args.data) if args.data else None
    level = args.level or settings.scoring.default_level

    result = score_normal_mode(
        NormalModeInput(resume_text=text, resume_data=data),
        base_score=args.base_score,
        level=level,
        has_job_description=args.with_jd,
    )

    if args.export == "json":
        print(export_result_json(result))
        return

    assessment = result.assessment
    adjustment = result.adjustment
    print(f"Input quality: {assessment.quality.value} ({assessment.quality_score}/100)")
    for issue in assessment.issues:
        print(f"  - {issue}")
    print(f"Candidate level: {result.candidate_level.value}")
    print(f"Score: {adjustment.base_score:g} -> {adjustment.final_score}")
    print(f"  {adjustment.explanation}")
    print(f"Match band: {result.match_band.value}")
    print(f"Confidence: {result.confidence.value}")
    print(f"Interview probability: {result.interview_probability}")


async def cmd_configs(args: argparse.Namespace, service: JobConfigService) -> None:
    """Handle the configs subcommand."""
    if args.action == "list":
        configs = await service.get_configs()
        print(f"{len(configs)} configuration(s)")
        for c in configs:
            state = "active" if c.is_active else "inactive"
            print(f"  {c.id}  {c.name} [{c.platform}, {state}]")
            print(f"    {format_search_config_for_display(c.search_config)}")
    elif args.action == "create":
        search_config = generate_default_search_config(args.platform)
        validation = validate_search_config(search_config)
        if not validation.valid:
            msg = "; ".join(validation.errors)
            raise ValueError(msg)
        actor_id = args.actor_id or popular_actor_ids().get(args.platform.lower())
        if not actor_id:
            msg = f"No known actor for platform '{args.platform}', pass --actor-id"
            raise ValueError(msg)
        config = await service.create_config(NewJobFetchConfig(
            name=args.name,
            platform=args.platform.lower(),
            actor_id=actor_id,
            search_config=search_config,
        ))
        print(f"Created {config.id}: {format_search_config_for_display(config.search_config)}")
    elif args.action == "toggle":
        config = await service.toggle_config(args.config_id, not args.off)
        print(f"{config.id} is now {'active' if config.is_active else 'inactive'}")
    elif args.action == "delete":
        await service.delete_config(args.config_id)
        print(f"Deleted {args.config_id}")


async def run(args: argparse.Namespace, settings: Settings) -> int:
    """Run a job-config subcommand. Returns the process exit code."""
    conn = init_db(settings.database.path)
    try:
        service = JobConfigService(conn, HttpSyncInvoker(settings.sync), settings.apify)

        if args.command == "configs":
            await cmd_configs(args, service)
        elif args.command == "sync":
            result = await service.trigger_manual_sync(args.config_id)
            print(result.message)
            return 0 if result.success else 1
        elif args.command == "stats":
            stats = await service.get_sync_stats()
            print(f"Syncs: {stats.total_syncs} ({stats.successful_syncs} ok, "
                  f"{stats.failed_syncs} failed)")
            print(f"Jobs: {stats.total_jobs_fetched} fetched, {stats.total_jobs_created} created")
            print(f"Last sync: {stats.last_sync_date or 'never'}")
        elif args.command == "test-connection":
            token = settings.apify.api_token()
            if not token:
                msg = f"{settings.apify.token_env} environment variable is required"
                raise ValueError(msg)
            check = await service.test_apify_connection(token, args.actor_id)
            print(check.message)
            return 0 if check.success else 1
    finally:
        conn.close()
    return 0


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.command == "assess":
            cmd_assess(args, settings)
        else:
            sys.exit(asyncio.run(run(args, settings)))
    except (FileNotFoundError, ImportError, LookupError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
