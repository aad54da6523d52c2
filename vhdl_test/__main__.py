"""Allow running the tool with ``python -m vhdl_test``."""

from vhdl_test.cli import main

if __name__ == "__main__":  # pragma: no cover
    main()
