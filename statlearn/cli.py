#!filepath: statlearn/cli.py
from typing import Optional

import typer
from pydantic import ValidationError
from rich import print
from rich.markup import escape

from statlearn import __version__, logs
from statlearn.config.app_config import AppConfig
from statlearn.utils.errors import UserInputError
from statlearn.utils.logger import init_logging

app = typer.Typer(help="statlearn: lasso path + k-means notebook pipelines")

ConfigOption = typer.Option(None, "--config", "-c", help="YAML config (default: statlearn/config/base.yml)")


def _load(config: Optional[str]) -> AppConfig:
    cfg = AppConfig.load(config)
    init_logging(cfg.log)
    return cfg


def _guard(func, *args):
    try:
        return func(*args)
    except (UserInputError, FileNotFoundError, ValidationError) as e:
        print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    except Exception:
        logs.exception("[CLI] unexpected failure")
        raise


def _run_lasso(config: Optional[str]):
    from statlearn.workflows.birthweight_lasso import build_birthweight_lasso

    cfg = _load(config)
    ctx = build_birthweight_lasso(cfg).run()

    cv = ctx.cv
    print(f"[green]lambda_min={cv.lambda_min:.6g} lambda_1se={cv.lambda_1se:.6g}[/green]")
    print(ctx.path.coef_at(cv.lambda_min).to_string())
    print(f"[blue]artifacts -> {ctx.run_dir}[/blue]")
    return ctx


def _run_kmeans(config: Optional[str]):
    from statlearn.workflows.pokemon_kmeans import build_pokemon_kmeans

    cfg = _load(config)
    ctx = build_pokemon_kmeans(cfg).run()

    result = ctx.clusters
    print(f"[green]k={result.k} inertia={result.inertia:.4f} iters={result.n_iter}[/green]")
    print(f"cluster sizes: {result.cluster_sizes().tolist()}")
    print(f"[blue]artifacts -> {ctx.run_dir}[/blue]")
    return ctx


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def lasso(config: Optional[str] = ConfigOption):
    """
    Birthweight lasso path + cross-validated penalty
    """
    _guard(_run_lasso, config)


@app.command()
def kmeans(config: Optional[str] = ConfigOption):
    """
    Pokemon stats k-means clustering
    """
    _guard(_run_kmeans, config)


@app.command(name="all")
def run_all(config: Optional[str] = ConfigOption):
    """
    Both notebook pipelines, sequentially
    """
    _guard(_run_lasso, config)
    _guard(_run_kmeans, config)


if __name__ == "__main__":
    app()

# python -m statlearn.cli lasso --config statlearn/config/base.yml
