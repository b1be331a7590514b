"""Allow ``python -m gbindgen``."""

from gbindgen.main import main

if __name__ == "__main__":
    main()
