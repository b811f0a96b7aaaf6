"""
Command-line interface for QBF local search.
Provides commands to run a search and inspect the effective configuration.
"""

import json
import logging
from typing import List, Optional

import click
import yaml

from .service import QBFSearchService


logger = logging.getLogger(__name__)


@click.group()
@click.option('--config', default=None, help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def main(ctx, config: Optional[str], verbose: bool):
    """QBF Local Search CLI."""
    # Setup logging
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Store config path in context
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config
    ctx.obj['verbose'] = verbose


def _load_service(ctx) -> QBFSearchService:
    try:
        service = QBFSearchService(ctx.obj['config_path'])
    except Exception as e:
        raise click.ClickException(f"Could not load configuration: {e}")
    if ctx.obj.get('verbose'):
        logging.getLogger().setLevel(logging.DEBUG)
    return service


def _parse_start(value: Optional[str]) -> Optional[List[int]]:
    if not value:
        return None
    try:
        return [int(part) for part in value.split(',') if part.strip()]
    except ValueError:
        raise click.BadParameter(f"Expected comma-separated integers, got {value!r}", param_hint='--start')


@main.command()
@click.option('--size', type=int, help='Override instance.size')
@click.option('--instance-seed', type=int, help='Override instance.seed')
@click.option('--seed', type=int, help='Random seed for the local search')
@click.option('--policy', type=click.Choice(['best', 'first']), help='Move selection policy')
@click.option('--repair', type=click.Choice(['randomized', 'deterministic', 'window']),
              help='Repair strategy to use')
@click.option('--max-rounds', type=int, help='Stop after this many rounds')
@click.option('--start', default=None, help='Starting solution, e.g. "1,3,5"')
@click.option('--trace', is_flag=True, help='Print the per-round decision trace as JSON')
@click.pass_context
def run(ctx, size: int, instance_seed: int, seed: int, policy: str, repair: str,
        max_rounds: int, start: str, trace: bool):
    """Run local search on a generated instance."""
    service = _load_service(ctx)

    # Apply CLI config overrides (precedence: CLI > YAML)
    overrides = {}
    if size is not None:
        overrides["instance.size"] = size
    if instance_seed is not None:
        overrides["instance.seed"] = instance_seed
    if seed is not None:
        overrides["search.random_seed"] = seed
    if policy:
        overrides["search.policy"] = policy
    if repair:
        overrides["repair.strategy"] = repair
    if max_rounds is not None:
        overrides["search.max_rounds"] = max_rounds

    try:
        service.apply_overrides(overrides)
        start_indices = _parse_start(start)

        click.echo(f"Running local search on {service.config.instance.size} variables...")
        click.echo(f"  Policy: {service.config.search.policy}-improvement")
        click.echo(f"  Repair: {service.config.repair.strategy}")

        result = service.run(start=start_indices, trace=trace)
    except click.ClickException:
        raise
    except Exception as e:
        logger.error(f"Local search failed: {e}")
        raise click.ClickException(str(e))

    # Display results
    click.echo(f"\nLocal search completed:")
    click.echo(f"  Cost: {result.cost:.4f}")
    click.echo(f"  Selected: {sorted(result.solution)}")
    click.echo(f"  Feasible: {result.feasible}")
    click.echo(f"  Rounds: {result.rounds}")
    click.echo(f"  Moves applied: {result.moves_applied}")
    click.echo(f"  Repairs: {result.repairs_run} ({result.repair_removals} removals)")
    click.echo(f"  Computation time: {result.computation_time_seconds:.2f}s")

    if trace and result.trace_data is not None:
        click.echo("\nTrace:")
        click.echo(json.dumps(result.trace_data, indent=2))


@main.command()
@click.pass_context
def show_config(ctx):
    """Print the effective configuration."""
    service = _load_service(ctx)
    click.echo(yaml.safe_dump(service.config.model_dump(), sort_keys=False))


if __name__ == '__main__':
    main()
