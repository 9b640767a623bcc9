from __future__ import annotations

import argparse
import logging
from typing import Sequence

from carprice.errors import PipelineError
from runner.batch import run_batch
from runner.logging_config import configure_logging, new_run_id
from runner.settings import RunSettings

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fit a random forest on used-car listings and export log-price predictions."
    )
    parser.add_argument("--train", dest="train_path", help="Training CSV (with price).")
    parser.add_argument("--test", dest="test_path", help="Test CSV (without price).")
    parser.add_argument("--output-dir", dest="output_dir", help="Directory for the submission and plot.")
    parser.add_argument("--identity", dest="submission_identity", help="First submission header line.")
    parser.add_argument("--identifier", dest="submission_identifier", help="Second submission header line.")
    parser.add_argument("--seed", dest="random_seed", type=int, help="Random seed for the forest.")
    parser.add_argument("--trees", dest="n_trees", type=int, help="Number of trees.")
    parser.add_argument("--log-level", dest="log_level", help="Logging level.")
    parser.add_argument("--log-format", dest="log_format", choices=("text", "json"))
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    overrides = {k: v for k, v in vars(args).items() if v is not None}
    settings = RunSettings(**overrides)
    configure_logging(settings.log_level, settings.log_format)
    new_run_id()
    try:
        run_batch(settings)
    except (PipelineError, OSError):
        logger.exception("Run aborted")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
