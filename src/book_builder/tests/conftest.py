"""Shared test fixtures for Book Builder tests."""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict

import pytest

FRONT_MATTER_YML = """\
title: Cucina *di casa*
subtitle: Recipes from a small kitchen
author: Ada Cook
email: ada@example.com
site: https://example.com/book
"""

ZEN_MD = """\
---
title: Zen
---
# Patience

Good food takes time.

# Taste

Taste everything.
"""

WARNINGS_MD = """\
---
title: Warnings
---
# Knives

Keep them *sharp*.
"""

PROLOGUE_MD = """\
---
title: Prologue
---
This book collects the recipes of a small kitchen.

Cook them often.
"""

THANKS_MD = """\
---
title: Thanks
---
To everyone who ate the failures.
"""

PASTA_MD = """\
---
name: Pasta al pomodoro
time: 30m
ingredients:
  - spaghetti 200g
  - tomatoes (ripe) 4-5
  - salt?
  - name: basil
    comment: fresh
    quantity:
      value: 5
      unit: leaves
tools:
  - pot
  - "*large* pan"
tags:
  - pasta
  - quick
---
A quick summer pasta.

# Preparation

1. Boil the water.
2. Cook the **spaghetti**.

# Notes

- Use fresh tomatoes.
"""

BREAD_MD = """\
---
name: Bread
time: 3h 30m
ingredients:
  - flour 500g
  - water 350ml
tools:
  - oven
tags:
  - baking
---
# Preparation

1. Knead.
2. Bake.

# Notes

- Let it cool.
"""

# Fixed modification times, one per file, so freshness is predictable.
BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)
NEWEST_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def write_file(path: Path, text: str, mtime: datetime = BASE_TIME) -> Path:
    """Write a file and set its modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    timestamp = mtime.timestamp()
    os.utime(path, (timestamp, timestamp))
    return path


def build_book(root: Path) -> Dict[str, Path]:
    """Create a complete book directory under ``root``."""
    files = {
        "front_matter": write_file(root / "front_matter.yml", FRONT_MATTER_YML),
        "zen": write_file(root / "introduction" / "zen.md", ZEN_MD),
        "prologue": write_file(root / "introduction" / "prologue.md", PROLOGUE_MD),
        "warnings": write_file(root / "introduction" / "warnings.md", WARNINGS_MD),
        "thanks": write_file(root / "introduction" / "thanks.md", THANKS_MD),
        "pasta": write_file(root / "recipes" / "pasta.md", PASTA_MD, NEWEST_TIME),
        "bread": write_file(root / "recipes" / "bread.md", BREAD_MD),
    }
    # Entries the loader must ignore
    write_file(root / "recipes" / "README.txt", "Not a recipe")
    write_file(root / "recipes" / "drafts" / "soup.md", "not even valid")
    return files


@pytest.fixture
def sample_book(tmp_path) -> Path:
    """Provide a complete, valid book directory."""
    book_dir = tmp_path / "book"
    build_book(book_dir)
    return book_dir


@pytest.fixture
def pasta_text() -> str:
    """Source of a recipe using every ingredient form."""
    return PASTA_MD


@pytest.fixture
def bread_text() -> str:
    """Source of a recipe without a description."""
    return BREAD_MD


@pytest.fixture
def newest_time() -> datetime:
    """Modification time of the most recently changed file of ``sample_book``."""
    return NEWEST_TIME


@pytest.fixture
def base_time() -> datetime:
    """Modification time of every other file of ``sample_book``."""
    return BASE_TIME


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo logging changes made by setup_logging during a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    root_level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(root_level)
    logging.getLogger("book_builder").setLevel(logging.NOTSET)


@pytest.fixture
def env_var(monkeypatch):
    """
    Declare environment variables a test may set, directly or from a .env file.

    Each declared variable is absent during the test and removed afterwards.
    """
    def declare(*names: str) -> None:
        for name in names:
            monkeypatch.setenv(name, "unset")
            monkeypatch.delenv(name)
    return declare
