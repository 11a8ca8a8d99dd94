import sys

from stylecheck.lint_cpp.run_all_checkers import main


if __name__ == "__main__":
    sys.exit(main())
