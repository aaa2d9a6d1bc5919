"""
Command-line interface for aerograph.

Commands:
- aerograph run: open the interactive smoke canvas
- aerograph headless: run the solver without a window and report density
"""

import logging
import math
from dataclasses import replace

import click

from .brush import Brush, ToolMode
from .config import DEFAULT_CONFIG
from .errors import AerographError
from .solver import FluidSolver

logger = logging.getLogger(__name__)


def setup_logging(verbose, quiet):
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def simulation_options(f):
    options = [
        click.option("--resolution", "-n", type=int, default=None, help="Interior cells per axis."),
        click.option("--viscosity", type=float, default=None),
        click.option("--diffusion", type=float, default=None),
        click.option("--fade-rate", type=float, default=None, help="Density lost per tick (0 disables)."),
        click.option("--iterations", type=int, default=None, help="Relaxation sweeps per solve."),
        click.option("--dt", type=float, default=None),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def circle_path(n, ticks, turns=1.0):
    """Points on a circle around the grid centre, one per tick."""
    cx = cy = (n + 2) / 2
    r = n / 4
    for k in range(ticks + 1):
        theta = 2 * math.pi * turns * k / max(ticks, 1)
        yield cx + r * math.cos(theta), cy + r * math.sin(theta)


@click.group()
@click.version_option(package_name="aerograph")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging.")
@click.option("--quiet", "-q", is_flag=True, help="Errors only.")
def main(verbose, quiet):
    """Aerograph: paint with smoke on a Stable Fluids grid."""
    setup_logging(verbose, quiet)


@main.command()
@simulation_options
@click.option("--window", type=int, default=None, help="Window size in pixels.")
def run(window, **overrides):
    """Open the interactive canvas."""
    from .app import App

    config = DEFAULT_CONFIG.with_overrides(**overrides)
    if window is not None:
        config = replace(config, display=replace(config.display, window=window))
    try:
        App(config).run()
    except AerographError as e:
        raise click.ClickException(str(e))


@main.command()
@simulation_options
@click.option("--ticks", type=int, default=200, show_default=True)
@click.option("--report-every", type=int, default=50, show_default=True)
@click.option("--show", is_flag=True, help="Plot the final density with matplotlib.")
def headless(ticks, report_every, show, **overrides):
    """Drive a circular smoke stroke for TICKS ticks and report density."""
    config = DEFAULT_CONFIG.with_overrides(**overrides)
    try:
        config.validate()
        fluid = FluidSolver.from_config(config.simulation)
    except AerographError as e:
        raise click.ClickException(str(e))

    sim = config.simulation
    brush = Brush(config.brush)
    path = list(circle_path(fluid.size, ticks))
    for k in range(ticks):
        brush.stroke(fluid, path[k], path[k + 1], ToolMode.SMOKE)
        fluid.step(sim.iterations, sim.fade_rate)
        if report_every and (k + 1) % report_every == 0:
            logger.info("tick %d: total density %.1f", k + 1, fluid.total_density())

    click.echo(f"ticks={ticks} total_density={fluid.total_density():.3f} "
               f"mean_abs_divergence={fluid.mean_abs_divergence():.3e}")

    if show:
        import matplotlib.pyplot as plt

        N = fluid.size
        d = fluid.density_view()[1:N+1, 1:N+1]
        fig, ax = plt.subplots(figsize=(6, 6))
        ax.set_title(f"Density after {ticks} ticks")
        ax.imshow(d, origin="upper", cmap="gray", vmin=0.0, vmax=max(1e-6, float(d.max())),
                  interpolation="bilinear")
        ax.set_xticks([]); ax.set_yticks([])
        plt.show()


if __name__ == "__main__":
    main()
