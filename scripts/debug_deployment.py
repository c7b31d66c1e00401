#!/usr/bin/env python3
"""
Show the deployment state of recent landing pages.

Usage:
    python scripts/debug_deployment.py
    python scripts/debug_deployment.py --limit 25 --status error
    python scripts/debug_deployment.py --page <page_id> --jobs
    python scripts/debug_deployment.py --watch <deploy_id>

Lists pages with their Netlify site, URL and last deploy time, then the pages
that have a Netlify site id. --jobs adds the deployment job history of one
page; --watch polls a Netlify deploy until it is ready or failed.
"""

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv
from tabulate import tabulate

from landing_builder.core.exceptions import BaseServiceError
from landing_builder.core.logging_config import configure_logging
from landing_builder.database import get_session
from landing_builder.services.deployment_monitor import DeploymentMonitor, fetch_deploy_state
from landing_builder.services.landing_page_service import LandingPageService

load_dotenv()
logger = logging.getLogger(__name__)


async def show_pages(limit: int, status: str = None):
    async with get_session() as db:
        pages = await LandingPageService(db).list_pages(status=status, limit=limit)

    rows = [
        [p.id, p.slug, p.status, p.netlify_site_id or "-", p.deployed_url or "-",
         p.last_deployed_at.strftime("%Y-%m-%d %H:%M") if p.last_deployed_at else "-"]
        for p in pages
    ]
    print("Current landing pages:")
    print(tabulate(rows, headers=["id", "slug", "status", "netlify_site_id", "url", "last_deployed_at"], tablefmt="simple"))

    with_site = [p for p in pages if p.netlify_site_id]
    print(f"\nPages with Netlify site ID: {len(with_site)}")
    for p in with_site:
        print(f"- {p.slug}: {p.netlify_site_id}")


async def show_jobs(page_id: str, limit: int):
    async with get_session() as db:
        jobs = await LandingPageService(db).list_jobs(page_id, limit)

    rows = [
        [j.created_at.strftime("%Y-%m-%d %H:%M:%S") if j.created_at else "-", j.status, j.output_format,
         j.deploy_id or "-", j.provider_state or "-", (j.error_message or "")[:60]]
        for j in jobs
    ]
    print(f"\nDeployment jobs for {page_id}:")
    print(tabulate(rows, headers=["created", "status", "format", "deploy_id", "provider_state", "error"], tablefmt="simple"))


async def watch(deploy_id: str, interval: float):
    def report(state):
        print(f"  {state.deploy_id}: {state.state.value} ({state.provider_state})")

    monitor = DeploymentMonitor(fetch_deploy_state, interval=interval, on_update=report)
    monitor.start(deploy_id)
    final = await monitor.wait()
    if final is None:
        print(f"Gave up on {deploy_id}: {monitor.error}")
        return 1
    print(f"Final state: {final.state.value} {final.url or ''}")
    return 0 if final.state.value == "ready" else 1


async def main():
    parser = argparse.ArgumentParser(description="Inspect landing page deployments")
    parser.add_argument("--limit", type=int, default=10, help="Number of pages to list")
    parser.add_argument("--status", help="Only pages with this status (draft, deploying, published, error)")
    parser.add_argument("--page", help="Page id for --jobs")
    parser.add_argument("--jobs", action="store_true", help="Show deployment job history for --page")
    parser.add_argument("--watch", metavar="DEPLOY_ID", help="Poll a Netlify deploy until it settles")
    parser.add_argument("--interval", type=float, default=3.0, help="Polling interval for --watch")
    args = parser.parse_args()

    configure_logging()
    try:
        if args.watch:
            return await watch(args.watch, args.interval)
        await show_pages(args.limit, args.status)
        if args.jobs:
            if not args.page:
                parser.error("--jobs needs --page")
            await show_jobs(args.page, args.limit)
    except BaseServiceError as e:
        logger.error(f"Connection error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
