import sys
from pathlib import Path

# Put src/ on sys.path so the tests run from a fresh clone without pip install -e .
src_path = str(Path(__file__).resolve().parents[1] / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)
