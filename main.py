"""YouTube Creator Campaign Planner: Entry Point.

Usage:
    # Plan a campaign from a JSON file of campaign details
    python main.py plan --input campaign.json

    # Plan from flags, analyzing the product URL first
    python main.py plan --goals "Launch our new earbuds" --budget "$5,000 - $10,000" \
        --timeline "6 weeks" --product-url https://example.com/tech/earbuds --analyze

    # Force mock data (no Gemini call), repeatable with a seed
    python main.py plan --input campaign.json --mock --seed 7

    # Analyze a product URL on its own
    python main.py analyze https://example.com/beauty/serum

    # Normalize a saved raw model reply into a campaign plan
    python main.py parse reply.txt --output plan.json

    # Re-normalize the last plan saved to the outputs directory
    python main.py parse
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

import config
from agents.campaign_planner import CampaignPlannerAgent
from agents.product_analyst import ProductAnalystAgent
from pipeline.normalizer import normalize_plan
from pipeline.response_parser import parse_response
from schemas.campaign_plan import CampaignPlan, CampaignRequest
from schemas.product_analysis import ProductAnalysis

console = Console()


def setup_logging():
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def load_request(args: argparse.Namespace) -> CampaignRequest:
    """Build a CampaignRequest from a JSON file or CLI flags."""
    if args.input:
        path = Path(args.input)
        if not path.exists():
            console.print(f"[red]Input file not found: {path}[/red]")
            sys.exit(1)
        try:
            return CampaignRequest.model_validate(json.loads(path.read_text(encoding="utf-8")))
        except (json.JSONDecodeError, ValidationError) as e:
            console.print(f"[red]Invalid input file {path}: {e}[/red]")
            sys.exit(1)

    return CampaignRequest(
        campaign_goals=args.goals or "",
        target_audience=args.audience or "",
        creator_details=args.creators or "",
        campaign_budget=args.budget or "",
        timeline=args.timeline or "",
        product_info=args.product_url or "",
    )


def _write_json(data: dict, path: str):
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    console.print(f"\n[green]Output saved:[/green] {output_path}")


def print_analysis(analysis: ProductAnalysis):
    info = analysis.extracted_info
    console.print(
        Panel(
            f"[bold]{analysis.domain or analysis.url}[/bold]  [dim]({analysis.analysis_source})[/dim]\n"
            f"Category: {info.category}\n"
            f"Price: {info.estimated_price}\n"
            f"Audience: {info.target_demographic}\n"
            f"Features: {', '.join(info.key_features) or 'N/A'}\n"
            f"Creator types: {', '.join(info.recommended_creator_types) or 'N/A'}\n"
            f"Content styles: {', '.join(info.suggested_content_styles) or 'N/A'}",
            title="Product Analysis",
            border_style="bright_blue",
        )
    )


def print_plan(plan: CampaignPlan):
    console.print(Panel(f"[bold cyan]{plan.campaign_name}[/bold cyan]", border_style="bright_blue"))

    for title, items in (
        ("Video Ideas", plan.video_ideas),
        ("Tracking Metrics", plan.tracking_metrics),
        ("Keys to Success", plan.keys_to_success),
    ):
        console.print(f"\n[bold]{title}[/bold]")
        for i, item in enumerate(items, 1):
            console.print(f"  {i}. {item}")

    for category in plan.creator_categories:
        table = Table(title=category.category_name, show_lines=False)
        table.add_column("Creator", style="cyan")
        table.add_column("Subscribers")
        table.add_column("Avg views")
        table.add_column("Budget fit")
        table.add_column("Channel", style="dim")
        for creator in category.creators:
            table.add_row(
                creator.name, creator.subscribers, creator.average_views,
                creator.budget_fit, creator.channel_url,
            )
        console.print()
        console.print(table)

    console.print(
        f"\n[dim]{plan.total_creators} creators in {len(plan.creator_categories)} categories[/dim]"
    )


def run_analyze(args: argparse.Namespace):
    analysis = ProductAnalystAgent(fetch_page=not args.no_fetch).analyze_product(args.url)
    print_analysis(analysis)
    if args.output:
        _write_json(analysis.to_dict(), args.output)


def run_plan(args: argparse.Namespace):
    if args.mock:
        config.MOCK_ENABLED = True

    request = load_request(args)
    if not request.campaign_goals.strip():
        console.print("[red]Campaign goals are required (--goals or campaignGoals in --input)[/red]")
        sys.exit(1)

    if args.analyze and request.product_info and request.product_analysis is None:
        analysis = ProductAnalystAgent().analyze_product(request.product_info)
        print_analysis(analysis)
        request.product_analysis = analysis.to_dict()

    rng = random.Random(args.seed) if args.seed is not None else None
    agent = CampaignPlannerAgent(rng=rng)
    plan = agent.generate_campaign_plan(request.to_inputs())
    print_plan(plan)

    if args.output:
        _write_json(plan.to_dict(), args.output)
    else:
        output_path = agent.save_output(plan)
        console.print(f"\n[green]Output saved:[/green] {output_path}")


def run_parse(args: argparse.Namespace):
    if args.file is None:
        saved = CampaignPlannerAgent().load_previous_output()
        if saved is None:
            console.print(f"[red]No saved campaign plan in {config.OUTPUT_DIR}[/red]")
            sys.exit(1)
        plan = normalize_plan(saved)
    else:
        path = Path(args.file)
        if not path.exists():
            console.print(f"[red]File not found: {path}[/red]")
            sys.exit(1)
        plan = normalize_plan(parse_response(path.read_text(encoding="utf-8")))

    print_plan(plan)
    if args.output:
        _write_json(plan.to_dict(), args.output)


def main():
    parser = argparse.ArgumentParser(
        description="YouTube Creator Campaign Planner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # -- plan command --
    plan_cmd = subparsers.add_parser("plan", help="Generate a campaign plan")
    plan_cmd.add_argument("--input", "-i", help="Path to JSON file of campaign details")
    plan_cmd.add_argument("--goals", "-g", help="Campaign goals")
    plan_cmd.add_argument("--audience", "-a", help="Target audience")
    plan_cmd.add_argument("--creators", "-c", help="Preferred creator details")
    plan_cmd.add_argument("--budget", "-b", help='Campaign budget (e.g. "$5,000 - $10,000")')
    plan_cmd.add_argument("--timeline", "-t", help="Campaign timeline")
    plan_cmd.add_argument("--product-url", "-p", help="Product URL")
    plan_cmd.add_argument("--analyze", action="store_true", help="Analyze the product URL first")
    plan_cmd.add_argument("--mock", action="store_true", help="Use mock data instead of Gemini")
    plan_cmd.add_argument("--seed", type=int, help="Seed for repeatable mock plans")
    plan_cmd.add_argument("--output", "-o", help="Write the plan JSON here")

    # -- analyze command --
    analyze_cmd = subparsers.add_parser("analyze", help="Analyze a product URL")
    analyze_cmd.add_argument("url", help="Product page URL")
    analyze_cmd.add_argument("--no-fetch", action="store_true", help="Don't fetch the page text")
    analyze_cmd.add_argument("--output", "-o", help="Write the analysis JSON here")

    # -- parse command --
    parse_cmd = subparsers.add_parser("parse", help="Normalize a saved raw model reply or the last saved plan")
    parse_cmd.add_argument("file", nargs="?", help="Path to the raw reply text (default: last saved plan)")
    parse_cmd.add_argument("--output", "-o", help="Write the plan JSON here")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(0)

    setup_logging()

    console.print(
        Panel(
            "[bold]YOUTUBE CREATOR CAMPAIGN PLANNER[/bold]\n"
            f"Gemini model: {config.GOOGLE_MODEL}"
            + ("  [yellow](mock mode)[/yellow]" if config.MOCK_ENABLED or getattr(args, "mock", False) else ""),
            border_style="bright_magenta",
        )
    )

    if args.command == "plan":
        run_plan(args)
    elif args.command == "analyze":
        run_analyze(args)
    elif args.command == "parse":
        run_parse(args)


if __name__ == "__main__":
    main()
