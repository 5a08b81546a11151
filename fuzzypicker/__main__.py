"""Module entrypoint for ``python -m fuzzypicker``.

All argument parsing and session setup happen in ``fuzzypicker.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
