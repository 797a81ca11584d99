from textwrap import dedent

import pytest
import structlog

from tagschema.scanner import EntityScanner

SAMPLE_SOURCE = dedent("""
    package sample

    // Not target
    type Dummy struct {
        foo int
    }

    // db:"entity"
    type Piyo struct {
        Id        int64  `db:"pk"`
        SomeValue string
    }

    // db:"entity"
    type Fragments struct {
        HiddenPk int64  `db:"pk"`
        Id       int64  `db:"unique"`
        Version  uint16 `db:"unique" default:"0"`
        Size     int32
        Addr     string `db:"unique"`
        PiyoId   int64  `refer:""`
    }
""")


@pytest.fixture
def scanner() -> EntityScanner:
    return EntityScanner()


@pytest.fixture
def sample_tables(scanner: EntityScanner):
    return scanner.scan_source(SAMPLE_SOURCE)


@pytest.fixture
def fragments(sample_tables):
    return next(t for t in sample_tables if t.name == "Fragments")


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    # the CLI binds structlog to the (captured) stderr of its test
    structlog.reset_defaults()


@pytest.fixture
def sample_source() -> str:
    return SAMPLE_SOURCE
