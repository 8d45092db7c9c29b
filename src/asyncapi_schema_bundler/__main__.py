"""Module entry point for `python -m asyncapi_schema_bundler`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
