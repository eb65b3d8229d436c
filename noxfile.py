"""Nox sessions for the contract proxy test matrix."""

import nox

PYTHONS = ["3.10", "3.11", "3.12", "3.13"]

nox.options.sessions = ["unit", "integration", "type_check"]
nox.options.default_venv_backend = "uv"


@nox.session(python=PYTHONS)
def unit(session):
    """Run the unit tests with every optional extra installed."""
    session.install(".[full,dev]")
    session.run("pytest", "tests/unit", "-q", *session.posargs)


@nox.session(python=PYTHONS)
def integration(session):
    """Drive generated proxies through httpx against mock services."""
    session.install(".[http,dev]")
    session.run("pytest", "tests/integration", "-q", *session.posargs)


@nox.session(python=PYTHONS[-1])
def coverage(session):
    """Run the whole suite and report line coverage of the package."""
    session.install(".[full,dev]")
    session.run(
        "pytest",
        "tests/",
        "--cov=contract_proxy",
        "--cov-report=term-missing",
        *session.posargs,
    )


@nox.session(python=PYTHONS)
def type_check(session):
    """Run mypy in strict mode over the package."""
    session.install(".[full,dev]")
    session.install("mypy")
    session.run("mypy", "src/contract_proxy", *session.posargs)
