#!/usr/bin/env python3
"""
Domain Hunt - Main CLI Entry Point

Import expired domains from pasted lists, vendor CSV exports or a free
listing scrape, score them, and walk the good ones through
candidate -> queued -> owned.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich import box

import config
from aggregate import DomainAggregate, FilteredView
from models import DomainRecord, NormalizeResult, ProfileStatus, SourceChannel, Tier
from profiles import export_profile
from repositories import configure_backend, get_repository
from sources import FreeScrapeClient, SpamZillaClient, normalize_import
from stores import AggregateStore, CredentialFlagStore, WatchlistStore, WorkflowStore
from workflow import AcquisitionWorkflow

console = Console()

TIER_STYLES = {
    Tier.GOLD: "bold yellow",
    Tier.SILVER: "white",
    Tier.BRONZE: "dark_orange",
    Tier.AVOID: "red",
    Tier.UNSCORED: "dim",
}

STATUS_STYLES = {
    ProfileStatus.PENDING: "dim",
    ProfileStatus.GENERATING: "cyan",
    ProfileStatus.SUCCESS: "green",
    ProfileStatus.FAILED: "red",
}


class App:
    """Loaded state for one CLI invocation."""

    def __init__(self, repository=None):
        repo = repository or get_repository()
        self.aggregate_store = AggregateStore(repo)
        self.aggregate: DomainAggregate = self.aggregate_store.load()
        self.watchlist = WatchlistStore(repo).load()
        self.workflow = AcquisitionWorkflow(WorkflowStore(repo).load())
        self.credentials = CredentialFlagStore(repo).load()
        self.credentials.sync_from_env()

    def save_aggregate(self) -> None:
        self.aggregate_store.save(self.aggregate)

    def find(self, name: str) -> Optional[DomainRecord]:
        """Record by name from the aggregate, falling back to workflow/watchlist copies."""
        name = name.strip().lower()
        record = self.aggregate.get(name)
        if record:
            return record
        for collection in (self.workflow.store.candidates, self.workflow.store.queued, self.workflow.store.owned):
            if name in collection:
                return collection[name].record
        entry = self.watchlist.get(name)
        return entry.record if entry else None


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8", errors="replace")


def _score_cell(record: DomainRecord) -> str:
    return str(record.score.overall) if record.score else "-"


def _tier_cell(record: DomainRecord) -> str:
    style = TIER_STYLES[record.tier]
    return f"[{style}]{record.tier.value}[/{style}]"


def print_records(records: list[DomainRecord], title: str, app: App = None) -> None:
    if not records:
        console.print(f"[dim]{title}: nothing to show[/dim]")
        return

    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Domain", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Tier")
    table.add_column("Rec.")
    table.add_column("TF", justify="right")
    table.add_column("DA", justify="right")
    table.add_column("Risk", justify="right")
    table.add_column("Value", justify="right", style="green")
    table.add_column("Source", style="dim")
    if app:
        table.add_column("", justify="center")

    for r in records:
        m = r.metrics
        row = [
            r.name,
            _score_cell(r),
            _tier_cell(r),
            r.score.recommendation.value if r.score else "-",
            f"{m.trust_flow:g}" if m and m.trust_flow is not None else "-",
            f"{m.domain_authority:g}" if m and m.domain_authority is not None else "-",
            f"{m.vendor_risk_score:g}" if m and m.vendor_risk_score is not None else "-",
            f"${r.score.estimated_value:,.0f}" if r.score else "-",
            r.source_channel.value,
        ]
        if app:
            row.append("★" if app.watchlist.is_watched(r.name) else "")
        table.add_row(*row)

    console.print(table)


def report_import(result: NormalizeResult, added: int) -> None:
    console.print(f"[green]Imported {added} new domain(s)[/green] "
                  f"[dim]({len(result.records)} parsed, {result.dropped} dropped, "
                  f"{result.duplicates} duplicate)[/dim]")
    if result.vendor_format:
        console.print(f"[dim]Vendor export detected, preset: {result.preset}[/dim]")
    if result.stats:
        s = result.stats
        console.print(
            f"[dim]AdSense-ready {s.adsense_ready}/{s.total} | avg TF {s.avg_trust_flow} | "
            f"avg risk {s.avg_risk_score} | avg DA {s.avg_domain_authority}[/dim]"
        )


# Commands

def cmd_import(app: App, args) -> int:
    text = _read_input(args.path)
    filename = None if args.path == "-" else Path(args.path).name
    result = normalize_import(text, filename)
    added = app.aggregate.add(result)
    app.save_aggregate()
    report_import(result, added)
    return 0


def cmd_scrape(app: App, args) -> int:
    client = FreeScrapeClient()
    console.print(f"[dim]Fetching {client.url} ...[/dim]")
    result = asyncio.run(client.fetch_async(args.keywords))
    if not result.success:
        console.print(f"[red]Scrape failed: {result.error}[/red]")
        if result.action_required:
            ar = result.action_required
            console.print(f"[yellow]{ar.message}[/yellow]")
            console.print(f"[dim]{ar.action}[/dim]")
            if ar.url:
                console.print(f"[dim]{ar.url}[/dim]")
        return 1

    added = app.aggregate.add(result.records)
    app.save_aggregate()
    console.print(f"[green]Scraped {len(result.records)} domain(s), {added} new[/green]")
    return 0


def cmd_enrich(app: App, args) -> int:
    if not app.credentials.configured:
        console.print("[yellow]SpamZilla API key not configured (set SPAMZILLA_API_KEY)[/yellow]")
        return 1

    names = [n.strip().lower() for n in args.names]
    if not names:
        names = [r.name for r in app.aggregate if not r.enriched]
    names = [n for n in names if n in app.aggregate]
    if not names:
        console.print("[dim]Nothing to enrich[/dim]")
        return 0

    client = SpamZillaClient()
    result = asyncio.run(client.enrich_async(names))
    updated = app.aggregate.apply_enrichment(result.metrics)
    app.save_aggregate()

    console.print(f"[green]Enriched {updated} domain(s)[/green]")
    for name, error in result.failed.items():
        console.print(f"[red]  {name}: {error}[/red]")
    return 0


def cmd_list(app: App, args) -> int:
    view = FilteredView(app.aggregate.records)
    view.set_filters(
        source_channel=SourceChannel(args.source) if args.source else None,
        min_score=args.min_score,
        tier=Tier(args.tier) if args.tier else None,
        keyword=args.keyword or "",
    )
    page = view.go_to(args.page)
    print_records(page.items, f"Domains (page {page.page}/{page.total_pages}, {page.total} total)", app)
    return 0


def cmd_watch(app: App, args) -> int:
    record = app.find(args.name)
    if record is None:
        console.print(f"[red]Unknown domain: {args.name}[/red]")
        return 1
    watched = app.watchlist.toggle(record, notes=args.notes)
    console.print(f"[green]{'Watching' if watched else 'Stopped watching'} {record.name}[/green]")
    return 0


def cmd_notes(app: App, args) -> int:
    if not app.watchlist.update_notes(args.name.lower(), args.text):
        console.print(f"[red]{args.name} is not on the watchlist[/red]")
        return 1
    console.print(f"[green]Notes updated for {args.name}[/green]")
    return 0


def cmd_watchlist(app: App, args) -> int:
    if args.clear:
        app.watchlist.clear()
        console.print("[green]Watchlist cleared[/green]")
        return 0

    entries = app.watchlist.entries
    if not entries:
        console.print("[dim]Watchlist is empty. Star a domain with: domain-hunt watch NAME[/dim]")
        return 0

    table = Table(title="Watchlist", box=box.ROUNDED)
    table.add_column("Domain", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Tier")
    table.add_column("Stage")
    table.add_column("Added", style="dim")
    table.add_column("Notes")
    for e in entries:
        stage = app.workflow.stage_of(e.name)
        table.add_row(
            e.name,
            _score_cell(e.record),
            _tier_cell(e.record),
            stage.value if stage else "-",
            e.added_at.strftime("%Y-%m-%d %H:%M"),
            e.notes or "",
        )
    console.print(table)
    return 0


def cmd_candidate(app: App, args) -> int:
    record = app.find(args.name)
    if record is None:
        console.print(f"[red]Unknown domain: {args.name}[/red]")
        return 1
    if not app.workflow.add_candidate(record):
        console.print(f"[yellow]{record.name} is already {app.workflow.stage_of(record.name).value}[/yellow]")
        return 1
    console.print(f"[green]{record.name} added to candidates[/green]")
    return 0


def cmd_queue(app: App, args) -> int:
    record = app.find(args.name)
    if record is None:
        console.print(f"[red]Unknown domain: {args.name}[/red]")
        return 1
    if not app.workflow.quick_queue(record):
        console.print(f"[yellow]{record.name} can't be queued from its current stage[/yellow]")
        return 1
    console.print(f"[green]{record.name} queued for purchase[/green]")
    return 0


def cmd_discard(app: App, args) -> int:
    if not app.workflow.discard(args.name.lower()):
        console.print(f"[yellow]{args.name} is not a candidate or queued[/yellow]")
        return 1
    console.print(f"[green]{args.name} discarded[/green]")
    return 0


async def _run_generation(app: App, start) -> None:
    task = start()
    if task is not None:
        with console.status("Generating profile..."):
            await task


def _report_profile(app: App, name: str) -> int:
    owned = app.workflow.get_owned(name)
    if owned.profile_status == ProfileStatus.SUCCESS:
        console.print(f"[green]Profile ready: {owned.profile.niche}[/green]")
        return 0
    console.print(f"[red]Profile generation failed: {owned.profile_error}[/red]")
    console.print(f"[dim]Retry with: domain-hunt retry {name}[/dim]")
    return 1


def cmd_purchase(app: App, args) -> int:
    name = args.name.lower()
    if name not in app.workflow.store.queued:
        console.print(f"[red]{name} is not in the purchase queue[/red]")
        return 1
    asyncio.run(_run_generation(app, lambda: app.workflow.mark_purchased(name)))
    console.print(f"[green]{name} marked purchased[/green]")
    return _report_profile(app, name)


def cmd_retry(app: App, args) -> int:
    name = args.name.lower()
    owned = app.workflow.get_owned(name)
    if owned is None or not owned.can_retry:
        console.print(f"[yellow]Nothing to retry for {name}[/yellow]")
        return 1
    asyncio.run(_run_generation(app, lambda: app.workflow.retry_profile(name)))
    return _report_profile(app, name)


def cmd_site_created(app: App, args) -> int:
    if not app.workflow.mark_site_created(args.name.lower()):
        console.print(f"[red]{args.name} is not owned[/red]")
        return 1
    console.print(f"[green]Site marked created for {args.name}[/green]")
    return 0


def cmd_remove_owned(app: App, args) -> int:
    if not app.workflow.remove_owned(args.name.lower()):
        console.print(f"[red]{args.name} is not owned[/red]")
        return 1
    console.print(f"[green]{args.name} removed from owned[/green]")
    return 0


def cmd_pipeline(app: App, args) -> int:
    for title, entries in (("Candidates", app.workflow.candidates), ("Purchase queue", app.workflow.queued)):
        print_records([e.record for e in entries], title)
    return 0


def cmd_owned(app: App, args) -> int:
    owned = app.workflow.owned
    if not owned:
        console.print("[dim]No owned domains yet[/dim]")
        return 0

    table = Table(title="Owned domains", box=box.ROUNDED)
    table.add_column("Domain", style="cyan")
    table.add_column("Purchased", style="dim")
    table.add_column("Profile")
    table.add_column("Niche / error")
    table.add_column("Site", justify="center")
    for o in owned:
        style = STATUS_STYLES[o.profile_status]
        detail = o.profile.niche if o.profile else (o.profile_error or "")
        table.add_row(
            o.name,
            o.purchased_at.strftime("%Y-%m-%d"),
            f"[{style}]{o.profile_status.value}[/{style}]",
            detail,
            "✓" if o.site_created else "",
        )
    console.print(table)
    return 0


def cmd_export_watchlist(app: App, args) -> int:
    count = app.watchlist.export_csv(Path(args.path), stage_of=app.workflow.stage_of)
    console.print(f"[green]Exported {count} watchlist entries to {args.path}[/green]")
    return 0


def cmd_export_profile(app: App, args) -> int:
    owned = app.workflow.get_owned(args.name.lower())
    if owned is None:
        console.print(f"[red]{args.name} is not owned[/red]")
        return 1
    path = export_profile(owned, Path(args.dir))
    if path is None:
        console.print(f"[yellow]{args.name} has no profile yet ({owned.profile_status.value})[/yellow]")
        return 1
    console.print(f"[green]Profile written to {path}[/green]")
    return 0


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        prog="domain-hunt",
        description="Find, score and acquire expired domains",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  domain-hunt import-text domains.txt        # Paste list (one per line)
  domain-hunt import-csv SZ-gold.csv         # SpamZilla export
  domain-hunt scrape --keywords seo,tech     # Free listing scrape
  domain-hunt list --tier gold --page 2      # Browse scored domains
  domain-hunt candidate example.com          # Start analysis
  domain-hunt queue example.com              # Queue for purchase
  domain-hunt purchase example.com           # Mark bought, generate profile
  domain-hunt owned                          # Owned domains + profile status
        """
    )
    parser.add_argument("--state-dir", help=f"State directory (default {config.STATE_DIR})")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("import-text", help="Import pasted/free-text domains (file or -)")
    p.add_argument("path")
    p.set_defaults(func=cmd_import)

    p = sub.add_parser("import-csv", help="Import a SpamZilla CSV export")
    p.add_argument("path")
    p.set_defaults(func=cmd_import)

    p = sub.add_parser("scrape", help="Scrape the free deleted-domains listing")
    p.add_argument("--keywords", "-k", help="Comma-separated keyword filter")
    p.set_defaults(func=cmd_scrape)

    p = sub.add_parser("enrich", help="Attach SpamZilla metrics (default: all unenriched)")
    p.add_argument("names", nargs="*")
    p.set_defaults(func=cmd_enrich)

    p = sub.add_parser("list", help="List scored domains")
    p.add_argument("--source", choices=[c.value for c in SourceChannel])
    p.add_argument("--min-score", type=int, default=0)
    p.add_argument("--tier", choices=[t.value for t in Tier])
    p.add_argument("--keyword", "-k", help="Comma-separated, any match")
    p.add_argument("--page", type=int, default=1)
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("watch", help="Star/un-star a domain")
    p.add_argument("name")
    p.add_argument("--notes")
    p.set_defaults(func=cmd_watch)

    p = sub.add_parser("notes", help="Set notes on a watched domain")
    p.add_argument("name")
    p.add_argument("text")
    p.set_defaults(func=cmd_notes)

    p = sub.add_parser("watchlist", help="Show the watchlist")
    p.add_argument("--clear", action="store_true")
    p.set_defaults(func=cmd_watchlist)

    for command, func, help_text in (
        ("candidate", cmd_candidate, "Add a domain to candidates"),
        ("queue", cmd_queue, "Queue a domain for purchase"),
        ("discard", cmd_discard, "Drop a candidate or queued domain"),
        ("purchase", cmd_purchase, "Mark a queued domain purchased"),
        ("retry", cmd_retry, "Retry a failed profile generation"),
        ("site-created", cmd_site_created, "Mark an owned domain's site as created"),
        ("remove-owned", cmd_remove_owned, "Remove an owned domain"),
    ):
        p = sub.add_parser(command, help=help_text)
        p.add_argument("name")
        p.set_defaults(func=func)

    p = sub.add_parser("pipeline", help="Show candidates and purchase queue")
    p.set_defaults(func=cmd_pipeline)

    p = sub.add_parser("owned", help="Show owned domains")
    p.set_defaults(func=cmd_owned)

    p = sub.add_parser("export-watchlist", help="Write the watchlist as CSV")
    p.add_argument("path")
    p.set_defaults(func=cmd_export_watchlist)

    p = sub.add_parser("export-profile", help="Write an owned domain's profile as JSON")
    p.add_argument("name")
    p.add_argument("--dir", default=str(config.EXPORTS_DIR))
    p.set_defaults(func=cmd_export_profile)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.state_dir:
        configure_backend("json", base_path=Path(args.state_dir))
    app = App()
    return args.func(app, args)


def cli():
    """Main CLI entry point"""
    sys.exit(main())


if __name__ == "__main__":
    cli()
