"""
Entry point for the `relmap` command-line interface.

Developer tooling for inspecting resolved relation graphs and the
effective configuration. Delegates to the Click CLI.
"""


def main():
    """Main entry point for the relmap CLI."""
    from .cli import cli

    cli()


if __name__ == "__main__":
    main()
