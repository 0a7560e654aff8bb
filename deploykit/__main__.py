from __future__ import annotations

from deploykit.core.app import main

if __name__ == "__main__":
    main()
