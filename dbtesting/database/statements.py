from typing import TYPE_CHECKING, Callable

from sqlalchemy import Engine, MetaData

if TYPE_CHECKING:
    from ..lifecycle.deadline import Deadline

LifecycleFunc = Callable[["Deadline", Engine], None]


def noop(deadline: "Deadline", engine: Engine) -> None:
    """Default setup and cleanup."""


def sql(*statements: str) -> LifecycleFunc:
    """Turn literal statements into a setup or cleanup function.

    Statements run in order inside a single transaction and are passed to the
    driver unchanged, so dialect-specific syntax and ``:`` characters are safe.

    Usage:
        Config(
            setup=sql("CREATE TABLE films (code char(5) PRIMARY KEY, title varchar(40))"),
            cleanup=sql("DROP TABLE films"),
        )
    """
    if not statements:
        raise ValueError("sql() needs at least one statement")

    def run(deadline: "Deadline", engine: Engine) -> None:
        with engine.begin() as conn:
            for statement in statements:
                deadline.check()
                conn.exec_driver_sql(statement)

    return run


def create_all(metadata: MetaData) -> LifecycleFunc:
    """Setup function creating every table of ``metadata``.

    Safe to run against a database that already has some of the tables.
    """

    def run(deadline: "Deadline", engine: Engine) -> None:
        deadline.check()
        metadata.create_all(engine)

    return run


def drop_all(metadata: MetaData) -> LifecycleFunc:
    """Cleanup function dropping every table of ``metadata``."""

    def run(deadline: "Deadline", engine: Engine) -> None:
        deadline.check()
        metadata.drop_all(engine)

    return run
