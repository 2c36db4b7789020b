import sys
import os

# Importable when executed by path, as the --use child is.
current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)
if not __package__ and current_dir in sys.path:
    # Our submodules must not shadow top-level names like `compiler` or `core`.
    sys.path.remove(current_dir)
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

from pybyte.main import main  # noqa: E402

if __name__ == "__main__":
    raise SystemExit(main())
