from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from carprice.config import TrainingConfig


class RunSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True
    )

    train_path: Path = Field(default=Path("PC3_small_train_data_v1.csv"), alias="TRAIN_PATH")
    test_path: Path = Field(default=Path("PC4_test_without_response_variable_v1.csv"), alias="TEST_PATH")
    output_dir: Path = Field(default=Path("outputs"), alias="OUTPUT_DIR")
    submission_filename: str = Field(default="submission.csv", alias="SUBMISSION_FILENAME")
    plot_filename: str = Field(default="train_y_vs_yhat.png", alias="PLOT_FILENAME")

    # Submission header
    submission_identity: str = Field(default="anonymous", alias="SUBMISSION_IDENTITY")
    submission_identifier: str = Field(default="00000000", alias="SUBMISSION_IDENTIFIER")

    # Forest
    random_seed: int = Field(default=626, alias="RANDOM_SEED")
    n_trees: int = Field(default=700, ge=1, alias="N_TREES")
    n_jobs: int = Field(default=-1, alias="N_JOBS")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="text", alias="LOG_FORMAT")

    @property
    def submission_path(self) -> Path:
        return self.output_dir / self.submission_filename

    @property
    def plot_path(self) -> Path:
        return self.output_dir / self.plot_filename

    def to_training_config(self) -> TrainingConfig:
        return TrainingConfig(n_trees=self.n_trees, n_jobs=self.n_jobs, random_seed=self.random_seed)
