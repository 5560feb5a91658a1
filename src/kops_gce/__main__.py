"""Allow ``python -m kops_gce``."""

from kops_gce.cli.main import main

if __name__ == "__main__":
    main()
