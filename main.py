"""CLI entrypoint for converting migration maps into OpenRewrite recipes."""

from migration_recipes.cli import main

if __name__ == "__main__":
    main()
