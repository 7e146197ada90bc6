from __future__ import annotations

import json
import logging
from collections import Counter
from pathlib import Path

import geojson
import typer

from .config import CodecConfig, load_codec_config
from .errors import ERROR_KINDS, GeoJsonSeqError
from .geo import from_value
from .reader import GeoJsonSeqReader, iter_items
from .writer import GeoJsonSeqWriter

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, help="geojsonseq: read and write GeoJSON text sequences")


def _setup(config: Path | None, verbose: bool) -> CodecConfig:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return load_codec_config(config)


@app.command()
def check(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="GeoJSON text sequence file"),
    config: Path | None = typer.Option(None, "--config", "-c", help="YAML codec config"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log skipped and rejected records"),
) -> None:
    """Decode every record and report how many failed, by kind."""

    cfg = _setup(config, verbose)

    ok = 0
    failed: Counter[str] = Counter()
    with path.open("rb") as f:
        for item in iter_items(f, stop_on_transport_error=cfg.stop_on_transport_error, **cfg.reader_kwargs()):
            if item.error is not None:
                failed[item.error.kind] += 1
                typer.secho(str(item.error), fg=typer.colors.RED, err=True)
            else:
                ok += 1

    typer.echo(f"ok: {ok}")
    for kind in ERROR_KINDS:
        if failed[kind]:
            typer.echo(f"{kind} errors: {failed[kind]}")

    if failed:
        raise typer.Exit(code=1)


@app.command()
def collect(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="GeoJSON text sequence file"),
    config: Path | None = typer.Option(None, "--config", "-c", help="YAML codec config"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log skipped and rejected records"),
) -> None:
    """Gather a sequence into a single FeatureCollection on stdout."""

    cfg = _setup(config, verbose)

    features: list[geojson.Feature] = []
    with path.open("rb") as f:
        rdr = GeoJsonSeqReader(f, **cfg.reader_kwargs())
        try:
            for obj in rdr:
                if obj["type"] == "FeatureCollection":
                    features.extend(obj["features"])
                elif obj["type"] == "Feature":
                    features.append(obj)
                else:
                    features.append(geojson.Feature(geometry=obj))
        except GeoJsonSeqError as e:
            typer.secho(str(e), fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1) from e

    logger.debug("collected %d features from %d records", len(features), rdr.records_read)
    typer.echo(json.dumps(geojson.FeatureCollection(features), ensure_ascii=cfg.ensure_ascii))


@app.command()
def split(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="GeoJSON document"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write here instead of stdout"),
    config: Path | None = typer.Option(None, "--config", "-c", help="YAML codec config"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log skipped and rejected records"),
) -> None:
    """Write a GeoJSON document as a sequence, one record per feature."""

    cfg = _setup(config, verbose)

    try:
        obj = from_value(json.loads(path.read_bytes()), **cfg.reader_kwargs())
    except ValueError as e:
        # Covers both malformed JSON and InvalidGeoJson.
        typer.secho(f"{path}: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from e

    objs = obj["features"] if obj["type"] == "FeatureCollection" else [obj]

    if output is None:
        n = GeoJsonSeqWriter(typer.get_binary_stream("stdout"), **cfg.writer_kwargs()).write_objects(objs)
    else:
        with GeoJsonSeqWriter(output.open("wb"), **cfg.writer_kwargs()) as wtr:
            n = wtr.write_objects(objs)

    logger.debug("wrote %d records", n)


def main() -> None:
    # Entry point for console script.
    app()


if __name__ == "__main__":
    main()
