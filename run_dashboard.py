#!/usr/bin/env python3
"""Direct launcher for the monthly budget dashboard.

This script launches Streamlit on ``monthly_budget/dashboard.py`` with the
project root importable.
"""

import os
import subprocess
import sys
from pathlib import Path

project_root = Path(__file__).parent.resolve()
dashboard_path = project_root / "monthly_budget" / "dashboard.py"

if __name__ == "__main__":
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(project_root), env.get("PYTHONPATH")]))
    subprocess.run(
        [sys.executable, "-m", "streamlit", "run", str(dashboard_path), *sys.argv[1:]],
        env=env,
        check=False,
    )
