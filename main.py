"""Local entrypoint shim for ``python main.py``."""

from hatchpack import main

if __name__ == "__main__":
    main()
