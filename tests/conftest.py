"""Pytest fixtures shared by the tick-median tests."""

from pathlib import Path
from typing import Iterable, Optional, Sequence

import pytest
import yaml


@pytest.fixture
def write_csv(tmp_path: Path):
    """Factory writing a semicolon CSV file; returns its path."""

    def _write(
        name: str,
        rows: Iterable[Sequence],
        header: Sequence[str] = ('receive_ts', 'price'),
        directory: Optional[Path] = None,
    ) -> Path:
        directory = directory or tmp_path / 'input'
        directory.mkdir(parents=True, exist_ok=True)
        lines = [';'.join(header)]
        lines.extend(';'.join(str(v) for v in row) for row in rows)
        path = directory / name
        path.write_text('\n'.join(lines) + '\n')
        return path

    return _write


@pytest.fixture
def price_dir(write_csv, tmp_path: Path) -> Path:
    """Two interleaved price files plus one file the mask excludes."""
    write_csv('btc_a.csv', [(10, '1'), (30, '3'), (50, '5')])
    write_csv(
        'btc_b.csv',
        [('2', 20, 'x'), ('4', 40, 'y')],
        header=('price', 'receive_ts', 'venue'),
    )
    write_csv('eth.csv', [(15, '1000')])
    return tmp_path / 'input'


@pytest.fixture
def write_config(tmp_path: Path):
    """Factory writing a YAML config file; returns its path."""

    def _write(data: dict, name: str = 'tick_median.yml') -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data))
        return path

    return _write


@pytest.fixture
def run_config(price_dir: Path, tmp_path: Path, write_config) -> Path:
    """Valid config pointing at price_dir, masked to the btc files."""
    return write_config({
        'version': 1,
        'main': {
            'input': str(price_dir),
            'output': str(tmp_path / 'out'),
            'filename_mask': ['btc'],
        },
        'estimator': {'strategy': 'exact'},
    })
