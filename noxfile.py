import nox

PYTHONS = ["3.10", "3.11", "3.12"]

SOURCES = [
    "packages/core/src",
    "packages/specifications/src",
    "packages/persistence/sqlalchemy/src",
    "packages/persistence/mongo/src",
]
TEST_SUITES = {
    "core": "packages/core/tests",
    "specifications": "packages/specifications/tests",
    "sqlalchemy": "packages/persistence/sqlalchemy/tests",
    "mongo": "packages/persistence/mongo/mongo_tests",
}

nox.options.sessions = ["lint", "tests", "arch_check"]


def _install_project(session: nox.Session, *extra: str) -> None:
    session.install("-e", ".[test]")
    if extra:
        session.install(*extra)


@nox.session(python=PYTHONS)
def tests(session: nox.Session) -> None:
    """Run the complete test suite with coverage."""
    _install_project(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHONS[-1])
@nox.parametrize("package", list(TEST_SUITES))
def suite(session: nox.Session, package: str) -> None:
    """Run one package's tests, e.g. ``nox -s "suite(package='mongo')"``."""
    _install_project(session)
    session.run("pytest", "--no-cov", TEST_SUITES[package], *session.posargs)


@nox.session(python=PYTHONS[-1])
def autoformat(session: nox.Session) -> None:
    """Fix lint findings and format in place."""
    session.install("ruff")
    session.run("ruff", "check", "--fix", ".")
    session.run("ruff", "format", ".")


@nox.session(python=PYTHONS[-1])
def lint(session: nox.Session) -> None:
    session.install("ruff")
    session.run("ruff", "check", ".")
    session.run("ruff", "format", "--check", ".")


@nox.session(python=PYTHONS)
def type_check(session: nox.Session) -> None:
    _install_project(session, "mypy")
    session.run("mypy", *SOURCES)


@nox.session(python=PYTHONS[-1])
def complexity(session: nox.Session) -> None:
    """Cognitive complexity report (complexipy)."""
    session.install("complexipy")
    session.run("complexipy", *SOURCES)


@nox.session(python=PYTHONS[-1])
def arch_check(session: nox.Session) -> None:
    """Package boundary rules (pytest-archon)."""
    _install_project(session)
    session.run("pytest", "--no-cov", "tests/architecture", *session.posargs)


@nox.session(python=PYTHONS[-1])
def dead_code(session: nox.Session) -> None:
    session.install("vulture")
    session.run("vulture", "--exclude", ".nox", *SOURCES, "tests")
