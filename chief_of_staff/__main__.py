from __future__ import annotations

from chief_of_staff.runtime.lifecycle import main


if __name__ == "__main__":
    raise SystemExit(main())
