import os
import sys
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def local_dev():
    os.chdir(PROJECT_ROOT)
    os.environ.setdefault("DAGSTER_HOME", str(PROJECT_ROOT))
    os.execvp(
        sys.executable,
        [sys.executable, "-m", "dagster", "dev", "-m", "match_engine.definitions"]
        + sys.argv[1:],
    )


def init_db():
    """Create the candidates, jobs and match_cache tables if missing."""
    from match_engine.db import build_url, create_tables

    load_dotenv()
    create_tables()
    print(f"Tables ready on {build_url().rsplit('@', 1)[-1]}")
