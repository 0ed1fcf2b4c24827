"""
Structured logging for ring-law check runs.

Produces:
  - manifest.json: One-time run metadata (git hash, config, versions)
  - results.jsonl: One record per checked law
  - failures.jsonl: Failed laws with their counterexample
  - metrics.jsonl: Timing per modulus
"""

import hashlib
import json
import subprocess
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict


@dataclass
class RunManifest:
    """Run-level metadata, saved once per run."""
    run_id: str
    timestamp: str
    git_commit: str
    config_hash: str
    python_version: str
    numpy_version: str
    native_bits: int
    config: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def save(self, path: Path):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2, default=str)


def _get_git_commit() -> str:
    """Get current git commit hash, or 'unknown'."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            capture_output=True, text=True, timeout=5,
        )
    except (OSError, subprocess.SubprocessError):
        return "unknown"
    return result.stdout.strip() if result.returncode == 0 else "unknown"


def _config_hash(config: Dict[str, Any]) -> str:
    """Deterministic hash of config dict."""
    s = json.dumps(config, sort_keys=True, default=str)
    return hashlib.sha256(s.encode()).hexdigest()[:16]


def create_manifest(run_id: str, config: Dict[str, Any]) -> RunManifest:
    """Create a RunManifest with auto-detected metadata."""
    import sys

    import numpy as np

    from .widths import DEFAULT_NATIVE_BITS

    return RunManifest(
        run_id=run_id,
        timestamp=time.strftime("%Y-%m-%dT%H:%M:%S%z"),
        git_commit=_get_git_commit(),
        config_hash=_config_hash(config),
        python_version=sys.version,
        numpy_version=np.__version__,
        native_bits=DEFAULT_NATIVE_BITS,
        config=config,
    )


class CheckLogger:
    """Structured JSONL logger for one check run.

    Writes three files:
      - results.jsonl   (every law)
      - failures.jsonl  (failed laws only, flushed immediately)
      - metrics.jsonl   (timing data)
    """

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self._results_path = self.output_dir / "results.jsonl"
        self._failures_path = self.output_dir / "failures.jsonl"
        self._metrics_path = self.output_dir / "metrics.jsonl"

        # Append mode so repeated runs into one directory accumulate
        self._results_f = open(self._results_path, 'a')
        self._failures_f = open(self._failures_path, 'a')
        self._metrics_f = open(self._metrics_path, 'a')

        self._results_count = 0
        self._failures_count = 0

    def log_result(self, record: Dict[str, Any]):
        """Log one law result; failed laws also go to failures.jsonl."""
        record = dict(record, timestamp=time.time())
        line = json.dumps(record, default=str) + "\n"
        self._results_f.write(line)
        self._results_count += 1

        if self._results_count % 100 == 0:
            self._results_f.flush()

        if not record.get("passed", True):
            self._failures_f.write(line)
            self._failures_f.flush()
            self._failures_count += 1

    def log_metrics(self, record: Dict[str, Any]):
        """Log timing / performance metrics."""
        record = dict(record, timestamp=time.time())
        self._metrics_f.write(json.dumps(record, default=str) + "\n")
        self._metrics_f.flush()

    def close(self):
        """Flush and close all log files."""
        for f in [self._results_f, self._failures_f, self._metrics_f]:
            f.flush()
            f.close()

    @property
    def summary(self) -> Dict[str, int]:
        return {
            "results_logged": self._results_count,
            "failures_logged": self._failures_count,
        }

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
