"""Allow running as ``python -m bucket_cache``"""

from .cli.main import main

if __name__ == "__main__":
    main()
