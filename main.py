from __future__ import annotations

from api import run

if __name__ == "__main__":
    run()
