import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from stagegate.adapters.memory_store import InMemoryContentStore
from stagegate.components.dependencies import DependencyValidator
from stagegate.components.suggestions import ContentSuggestion, SuggestionAggregator
from stagegate.components.transition import validate_stage_requirements
from stagegate.domain.entities import Content
from stagegate.domain.stages import TERMINAL_STAGE, is_terminal, stage_name
from stagegate.rules.loader import resolve_rules
from stagegate.rules.models import PipelineRules

logger = logging.getLogger("stagegate.cli")


def load_store(data_path: Path) -> InMemoryContentStore:
    """Load a JSON list of content objects into a fresh in-memory store."""
    with open(data_path) as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError(f"{data_path} must contain a JSON list of content objects")

    store = InMemoryContentStore()
    store.load(Content.model_validate(item) for item in raw)
    return store


def _print_suggestions(suggestions: list[ContentSuggestion]) -> None:
    if not suggestions:
        print("Nothing to suggest.")
        return
    for i, s in enumerate(suggestions, start=1):
        line = (
            f"{i}. {s.content.topic} [{stage_name(s.content.current_stage)}] "
            f"score={s.score:.1f} remaining={s.remaining_steps} priority={s.priority}"
        )
        print(line)
        for reason in s.blocked_by:
            print(f"   blocked: {reason}")


async def handle_suggest(
    store: InMemoryContentStore, rules: PipelineRules, args: argparse.Namespace
) -> int:
    aggregator = SuggestionAggregator(store, rules)
    _print_suggestions(await aggregator.get_publication_suggestions(args.max))
    return 0


async def handle_stats(
    store: InMemoryContentStore, rules: PipelineRules, args: argparse.Namespace
) -> int:
    stats = await SuggestionAggregator(store, rules).get_suggestion_statistics()
    print(f"Unpublished:        {stats.total_eligible}")
    print(f"Ready to advance:   {stats.ready_to_advance}")
    print(f"Blocked:            {stats.blocked_by_dependencies}")
    print(f"Average readiness:  {stats.average_readiness_score}")
    print(f"Top suggestions:    {stats.top_suggestions}")
    return 0


async def handle_ready(
    store: InMemoryContentStore, rules: PipelineRules, args: argparse.Namespace
) -> int:
    _print_suggestions(await SuggestionAggregator(store, rules).get_all_ready_contents())
    return 0


async def handle_blocked(
    store: InMemoryContentStore, rules: PipelineRules, args: argparse.Namespace
) -> int:
    _print_suggestions(await SuggestionAggregator(store, rules).get_blocked_contents())
    return 0


async def handle_check(
    store: InMemoryContentStore, rules: PipelineRules, args: argparse.Namespace
) -> int:
    content = await store.get_by_topic(args.topic)
    if content is None:
        logger.error("No content with topic %r", args.topic)
        return 1

    target = args.to if args.to is not None else min(content.current_stage + 1, TERMINAL_STAGE)
    errors = list(validate_stage_requirements(content, target, rules).errors)
    if is_terminal(target):
        publish = await DependencyValidator(store).validate_publish_dependencies(content)
        errors.extend(publish.errors)

    if errors:
        print(f"{content.topic}: cannot move to stage {target}")
        for error in errors:
            print(f"  - {error}")
        return 1

    print(f"{content.topic}: ready for stage {target} ({stage_name(target)})")
    return 0


HANDLERS = {
    "suggest": handle_suggest,
    "stats": handle_stats,
    "ready": handle_ready,
    "blocked": handle_blocked,
    "check": handle_check,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Content pipeline stage gate CLI")
    parser.add_argument("--rules", type=Path, help="Path to the rules YAML file")
    parser.add_argument(
        "--data", type=Path, required=True, help="JSON file with a list of content objects"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # suggest
    suggest_parser = subparsers.add_parser("suggest", help="What to work on next")
    suggest_parser.add_argument("--max", type=int, help="Maximum number of suggestions")

    # stats
    subparsers.add_parser("stats", help="Suggestion statistics")

    # ready / blocked
    subparsers.add_parser("ready", help="Content that can advance right now")
    subparsers.add_parser("blocked", help="Content waiting on a dependency")

    # check
    check_parser = subparsers.add_parser("check", help="Validate a stage change")
    check_parser.add_argument("topic", help="Topic of the content to check")
    check_parser.add_argument("--to", type=int, help="Target stage (default: next stage)")

    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)

    try:
        rules = resolve_rules(args.rules)
        store = load_store(args.data)
    except (OSError, ValueError, ValidationError) as e:
        logger.error("Could not load input: %s", e)
        return 1

    return asyncio.run(HANDLERS[args.command](store, rules, args))


if __name__ == "__main__":
    sys.exit(main())
