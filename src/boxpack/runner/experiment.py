"""Experiment runner for packing simulations."""

from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from boxpack.algorithms.packer import Packer
from boxpack.config import ExperimentConfig, PackerConfig, load_config
from boxpack.core.errors import PackingError, UnfitItemsExistError
from boxpack.core.models import Item
from boxpack.logger import configure_logging
from boxpack.monitoring.metrics import (
    BinMetrics,
    ExperimentMetrics,
    export_to_csv,
    export_to_json,
    format_packing_report,
    format_summary,
)
from boxpack.monitoring.telegram_notifier import (
    format_dataset_milestone,
    format_error,
    format_experiment_start,
    format_final_summary,
    send_telegram,
)
from boxpack.runner.dataset import bins_from_specs, generate_items, load_manifest

logger = logging.getLogger(__name__)


class ExperimentRunner:
    """
    Experiment orchestrator for packing simulations.

    Generates random item batches, packs each batch once per strategy into a
    fresh set of bins, collects per-bin metrics, saves results, and sends
    progress updates.
    """

    def __init__(
        self,
        config: ExperimentConfig | None = None,
        results_dir: Path | str | None = None,
        send_telegram_updates: bool | None = None,
    ):
        """
        Args:
            config: Experiment configuration (default: ExperimentConfig())
            results_dir: Overrides config.results_dir
            send_telegram_updates: Overrides config.send_telegram
        """
        self.config = config or ExperimentConfig()
        self.results_dir = Path(results_dir or self.config.results_dir)
        self.results_dir.mkdir(parents=True, exist_ok=True)
        if send_telegram_updates is None:
            send_telegram_updates = self.config.send_telegram
        self.send_telegram_updates = send_telegram_updates

    async def _notify(self, message: str) -> None:
        if self.send_telegram_updates:
            await send_telegram(message)

    async def run_experiment(self) -> ExperimentMetrics:
        """
        Run every strategy over every dataset.

        Flow:
            1. Send start notification
            2. For each dataset:
                a. Generate items
                b. For each strategy: pack a copy into fresh bins, record
                   metrics for the bins that were used, save interim results
                c. Send progress update
            3. Mark complete, save final results, send summary
        """
        cfg = self.config
        experiment_id = f"exp_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}"
        metrics = ExperimentMetrics(
            experiment_id=experiment_id,
            total_runs=cfg.num_datasets * len(cfg.strategies),
        )
        logger.info("Starting %s: %d datasets x %s",
                    experiment_id, cfg.num_datasets, cfg.strategies)

        await self._notify(format_experiment_start(
            total_datasets=cfg.num_datasets,
            items_per_dataset=cfg.items_per_dataset,
            strategies=cfg.strategies,
            bin_names=[b.name for b in cfg.bins],
        ))

        for dataset_idx in range(cfg.num_datasets):
            dataset_id = f"dataset_{dataset_idx:03d}"
            items = generate_items(
                count=cfg.items_per_dataset,
                seed=cfg.seed + dataset_idx,
                min_dim=cfg.min_dim,
                max_dim=cfg.max_dim,
                min_weight=cfg.min_weight,
                max_weight=cfg.max_weight,
            )

            for strategy in cfg.strategies:
                try:
                    self._run_strategy(metrics, strategy, dataset_id, items)
                except PackingError as exc:
                    metrics.record_error()
                    logger.warning("%s/%s rejected: %s", dataset_id, strategy, exc)
                    await self._notify(format_error(
                        type(exc).__name__, str(exc),
                        {"dataset": dataset_id, "strategy": strategy},
                    ))

            self._save_results(metrics, suffix=f"_interim_{dataset_idx + 1}")

            if dataset_idx % 2 == 0:
                await self._notify(format_dataset_milestone(
                    datasets_completed=dataset_idx + 1,
                    total_datasets=cfg.num_datasets,
                    avg_utilization=metrics.avg_utilization_pct,
                ))

        metrics.mark_complete()
        self._save_results(metrics, suffix="_final")

        await self._notify(format_final_summary(
            total_bins=metrics.total_bins,
            total_items=metrics.total_items,
            unfit_items=metrics.unfit_items,
            avg_utilization=metrics.avg_utilization_pct,
            runtime_seconds=metrics.runtime_seconds,
            errors=metrics.errors_count,
        ))

        logger.debug("\n%s", format_summary(metrics))
        return metrics

    def _make_packer(self, strategy: str) -> Packer:
        packer_cfg = self.config.packer.model_copy(
            update={"fewest_boxes": strategy == "fewest_boxes"},
        )
        return Packer.from_config(packer_cfg)

    def _run_strategy(
        self,
        metrics: ExperimentMetrics,
        strategy: str,
        dataset_id: str,
        items: Sequence[Item],
    ) -> None:
        """Pack copies of *items* with *strategy* and record the results."""
        packer = self._make_packer(strategy)
        packer.add_bin(*bins_from_specs(self.config.bins))
        packer.add_item(*(Item(i.name, i.width, i.height, i.depth, i.weight) for i in items))

        unfit = 0
        try:
            packer.pack()
        except UnfitItemsExistError as exc:
            unfit = len(exc.unfit_items)
            logger.info("%s/%s: %d unfit items", dataset_id, strategy, unfit)

        for bin in packer.bins:
            if bin.items:
                metrics.add_bin(BinMetrics.from_bin(bin, strategy, dataset_id))
        metrics.record_run(unfit=unfit)

    def _save_results(self, metrics: ExperimentMetrics, suffix: str = "") -> None:
        """Save metrics to JSON and CSV files."""
        base_filename = f"{metrics.experiment_id}{suffix}"

        json_path = self.results_dir / f"{base_filename}.json"
        include_bins = suffix.endswith("_final")
        export_to_json(metrics, json_path, include_bins=include_bins)

        csv_path = self.results_dir / f"{base_filename}_bins.csv"
        export_to_csv(metrics, csv_path)

        logger.debug("Saved results to %s and %s", json_path, csv_path)


def pack_manifest(
    path: Path | str,
    config: PackerConfig | None = None,
) -> Packer:
    """
    Pack the bins and items of a YAML manifest.

    Unfit items do not raise: they are left on ``packer.unfit_items``.
    Any other PackingError propagates.
    """
    bins, items = load_manifest(path)
    packer = Packer.from_config(config or PackerConfig())
    packer.add_bin(*bins)
    packer.add_item(*items)
    try:
        packer.pack()
    except UnfitItemsExistError as exc:
        logger.warning("%s", exc)
    return packer


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run 3D bin packing experiments")
    parser.add_argument("--config", help="YAML experiment config")
    parser.add_argument("--manifest", help="YAML manifest to pack once and report")
    parser.add_argument("--datasets", type=int, help="Number of datasets to generate")
    parser.add_argument("--items", type=int, help="Number of items per dataset")
    parser.add_argument("--fewest-boxes", action="store_true",
                        help="Use fewest-boxes mode when packing a manifest")
    parser.add_argument("--results-dir", help="Directory to save results")
    parser.add_argument("--no-telegram", action="store_true",
                        help="Disable Telegram notifications")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-file", help="Also log to this file (rotated daily)")
    return parser.parse_args(argv)


async def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(args.log_level.upper(), args.log_file)

    config = load_config(args.config) if args.config else ExperimentConfig()

    if args.manifest:
        packer_cfg = config.packer.model_copy(
            update={"fewest_boxes": args.fewest_boxes or config.packer.fewest_boxes},
        )
        packer = pack_manifest(args.manifest, packer_cfg)
        print(format_packing_report(packer.bins, packer.unfit_items))
        return 1 if packer.unfit_items else 0

    updates = {}
    if args.datasets is not None:
        updates["num_datasets"] = args.datasets
    if args.items is not None:
        updates["items_per_dataset"] = args.items
    if updates:
        config = ExperimentConfig.model_validate({**config.model_dump(), **updates})

    runner = ExperimentRunner(
        config,
        results_dir=args.results_dir,
        send_telegram_updates=False if args.no_telegram else None,
    )
    metrics = await runner.run_experiment()
    print(format_summary(metrics))
    return 0


def cli() -> None:
    """Console entry point (``boxpack-run``)."""
    raise SystemExit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
