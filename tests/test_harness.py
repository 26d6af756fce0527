"""Expose the run_tests.py modules to pytest, one test per harness function."""

import pytest

from run_tests import MODULES, ArtifactDir

CASES = [(code, fn) for code, module in MODULES.items() for fn in module.tests]


@pytest.mark.parametrize(
    "code,test_fn", CASES, ids=[f"{code}-{fn.__name__}" for code, fn in CASES]
)
def test_module_case(code, test_fn, tmp_path):
    result = test_fn(ArtifactDir(tmp_path))
    assert result.status != "FAIL", f"[{code}] {result.error}\n{result.stderr}"
