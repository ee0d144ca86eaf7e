"""Allow running exebuild as ``python -m exebuild``."""

from exebuild.cli import main

if __name__ == "__main__":
    main()
