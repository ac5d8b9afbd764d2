import argparse
import logging
import sys

import theme_files
from theme_files import ThemeError

# This will convert VS Code (https://code.visualstudio.com/) color themes
# to monaco editor themes, ready for monaco.editor.defineTheme().
#
# The converter modules live in src/, install them first (from the repo root):
#
#   pip install -e .
#
# then:
#
#   python scripts/vscode_themes.py --input ./themes/ --output ./monaco/
#   python scripts/vscode_themes.py blackboard.color-theme.json
#
# Directories can also come from a toml config (see theme_files.load_config).

CONFIG_PATH = "vscode_themes.toml"

logger = logging.getLogger("vscode_themes")


def setup_logging(debug=False):
  root = logging.getLogger()
  # Repeated calls (tests) shouldn't stack handlers.
  if root.handlers:
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    return root

  root.setLevel(logging.DEBUG if debug else logging.INFO)
  console = logging.StreamHandler(sys.stdout)
  console.setFormatter(logging.Formatter(
    "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
  ))
  root.addHandler(console)
  return root


def parse_args(argv):
  p = argparse.ArgumentParser(description="Convert VS Code color themes to monaco themes")
  p.add_argument("files", nargs="*", help="Individual theme files (default: every theme in the input dir)")
  p.add_argument("--config", default=CONFIG_PATH, help=f"toml config path (default: {CONFIG_PATH})")
  p.add_argument("--input", dest="input_dir", help="Directory of VS Code themes")
  p.add_argument("--output", dest="output_dir", help="Directory for the monaco themes")
  p.add_argument("--debug", action="store_true", help="Verbose logging")
  return p.parse_args(argv)


def main(argv=None):
  args = parse_args(sys.argv[1:] if argv is None else argv)
  setup_logging(args.debug)

  try:
    config = theme_files.load_config(args.config)
    input_dir = args.input_dir or config["input_dir"]
    output_dir = args.output_dir or config["output_dir"]

    if args.files:
      written, failed = theme_files.convert_files(args.files, output_dir)
    else:
      written, failed = theme_files.convert_dir(input_dir, output_dir)
  except ThemeError as e:
    logger.error("%s", e)
    return 1

  logger.info("%d themes converted, %d failed", len(written), len(failed))
  return 1 if failed else 0


if __name__ == "__main__":
  sys.exit(main())
