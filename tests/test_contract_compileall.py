from __future__ import annotations

import subprocess
import sys
import unittest
from pathlib import Path


REPO_ROOT = Path(__file__).resolve().parent.parent


class TestCompileAllContract(unittest.TestCase):
    def _compile(self, target: Path) -> None:
        self.assertTrue(target.exists(), f"Missing dir: {target}")
        cmd = [sys.executable, "-m", "compileall", "-q", str(target)]
        p = subprocess.run(cmd, cwd=str(REPO_ROOT), capture_output=True, text=True)
        combined = (p.stdout or "") + "\n" + (p.stderr or "")
        self.assertEqual(p.returncode, 0, f"compileall failed for {target.name}:\n{combined}")

    def test_package_compiles(self):
        self._compile(REPO_ROOT / "weekplan")

    def test_util_modules_present(self):
        util = REPO_ROOT / "weekplan" / "util"
        names = sorted(p.name for p in util.glob("*.py"))
        self.assertEqual(names, ["clock.py", "console.py", "timeparse.py"])

    def test_contract_tests_compile(self):
        self._compile(REPO_ROOT / "tests")


if __name__ == "__main__":
    unittest.main(verbosity=2)
