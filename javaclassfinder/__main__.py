"""Module entrypoint for ``python -m javaclassfinder``.

This keeps module-mode execution behavior identical to the ``jcf`` script.
All argument parsing and search setup happen in ``javaclassfinder.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
