"""
GRAPHGEN MAIN - Entry Point and CLI

Commands:
    generate      - Generate a graph from a preset or a spec file
    permutations  - List the valid core-axis spec permutations
    analyze       - Print the constraint analysis of a spec

Usage:
    # Generate a 10-node tree and print it as JSON
    python main.py generate --preset tree --nodes 10 --seed 42

    # Generate from a JSON spec (an object of axis patches) and validate it
    python main.py generate --spec my_spec.json --nodes 20 --validate

    # Count and describe the valid core permutations
    python main.py permutations

    # Check a spec for contradictions before generating
    python main.py analyze --spec my_spec.json --nodes 12

Spec File Format:
    JSON object mapping axis names to kinds or axis objects, e.g.
    {"cycles": "acyclic", "connectivity": "connected",
     "specific_regular": {"kind": "k_regular", "k": 3}}
"""
import sys
from pathlib import Path

import msgspec

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from core.constraints import analyze_graph_spec_constraints
from core.schemas import GraphGenerationConfig
from core.spec import (
    PRESETS,
    GraphGenError,
    GraphSpec,
    describe_spec,
    generate_core_spec_permutations,
    make_graph_spec,
    spec_from_json,
)
from core.validation import validate_graph_properties
from forge.world_builder import generate_graph
from infrastructure.logger import configure_logging


def _load_spec(args) -> GraphSpec:
    """Resolve --preset / --spec into a GraphSpec (defaults when neither is given)."""
    if getattr(args, "spec", None):
        return spec_from_json(Path(args.spec).read_bytes())
    if getattr(args, "preset", None):
        return PRESETS[args.preset]()
    return make_graph_spec()


def _print_json(value) -> None:
    print(msgspec.json.format(msgspec.json.encode(value), indent=2).decode())


def cmd_generate(args):
    """Generate a graph and print it (and optionally its validation) as JSON."""
    spec = _load_spec(args)
    config = GraphGenerationConfig(node_count=args.nodes, seed=args.seed)
    graph = generate_graph(spec, config)

    if not args.validate:
        _print_json(graph)
        return 0

    result = validate_graph_properties(graph)
    _print_json({"graph": graph, "validation": result})
    return 0 if result.valid else 1


def cmd_permutations(args):
    specs = generate_core_spec_permutations()
    print(f"{len(specs)} valid core permutations")
    for i, spec in enumerate(specs, 1):
        print(f"{i:>4}. {describe_spec(spec)}")
    return 0


def cmd_analyze(args):
    spec = _load_spec(args)
    analysis = analyze_graph_spec_constraints(spec, args.nodes)

    print("=" * 60)
    print(f"SPEC: {describe_spec(spec)}")
    print("=" * 60)
    if not analysis.impossibilities:
        print("No diagnostics")
    for diagnostic in analysis.impossibilities:
        print(f"[{diagnostic.severity.value.upper():<7}] {diagnostic.property}: {diagnostic.reason}")
    print("-" * 60)
    print(f"relax_density_validation: {analysis.adjustments.relax_density_validation}")
    print(f"relax_cycle_validation:   {analysis.adjustments.relax_cycle_validation}")
    return 1 if analysis.has_errors else 0


def main(argv=None):
    """Main entry point with subcommands."""
    import argparse

    parser = argparse.ArgumentParser(
        description="GraphGen - Spec-Driven Graph Generation and Validation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--log-level", default=None, help="Logging level (defaults to graphgen.toml)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # generate command
    generate_parser = subparsers.add_parser("generate", help="Generate a graph")
    source = generate_parser.add_mutually_exclusive_group()
    source.add_argument("--preset", choices=sorted(PRESETS), help="Named preset spec")
    source.add_argument("--spec", help="Path to a JSON spec file")
    generate_parser.add_argument("--nodes", type=int, default=10, help="Number of nodes")
    generate_parser.add_argument("--seed", type=int, default=None, help="RNG seed")
    generate_parser.add_argument("--validate", action="store_true", help="Validate and print the result")
    generate_parser.set_defaults(func=cmd_generate)

    # permutations command
    permutations_parser = subparsers.add_parser("permutations", help="List valid core permutations")
    permutations_parser.set_defaults(func=cmd_permutations)

    # analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Analyze spec constraints")
    source = analyze_parser.add_mutually_exclusive_group()
    source.add_argument("--preset", choices=sorted(PRESETS), help="Named preset spec")
    source.add_argument("--spec", help="Path to a JSON spec file")
    analyze_parser.add_argument("--nodes", type=int, default=None, help="Node count for parameter checks")
    analyze_parser.set_defaults(func=cmd_analyze)

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 2

    configure_logging(args.log_level)
    try:
        return args.func(args)
    except (GraphGenError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
