import json
import logging
import os

import toml

from monaco_theme import vs_to_monaco

# Reading VS Code themes from disk and writing the converted monaco themes.
# Themes can be json (what VS Code ships) or toml, and may "include" a
# parent theme the same way VS Code themes do.

logger = logging.getLogger("theme_files")

DEFAULT_INPUT_DIR  = "./themes/"
DEFAULT_OUTPUT_DIR = "./monaco/"

MONACO_SUFFIX = ".monaco-theme.json"
# Longest first, so "x.color-theme.json" doesn't end up as "x.color-theme".
THEME_SUFFIXES = (".color-theme.json", ".json", ".toml")

CONFIG_KEYS = ("input_dir", "output_dir")


class ThemeError(Exception):
  """Base error for theme loading and conversion."""


class ThemeLoadError(ThemeError):
  """A theme file couldn't be read, decoded or resolved."""


class ThemeWriteError(ThemeError):
  """A converted theme couldn't be written."""


class ConfigError(ThemeError):
  """The config file is corrupt or has bad values."""


def is_theme_file(file_name):
  if file_name.endswith(MONACO_SUFFIX): return False
  return file_name.endswith(THEME_SUFFIXES)


def theme_name(path):
  base = os.path.basename(path)
  for suffix in THEME_SUFFIXES:
    if base.endswith(suffix):
      return base[:-len(suffix)]
  return os.path.splitext(base)[0]


def output_name(path):
  return theme_name(path) + MONACO_SUFFIX


def _read_theme(path):
  try:
    with open(path, 'r', encoding="utf-8-sig") as fi:
      content = fi.read()
  except (OSError, UnicodeDecodeError) as e:
    raise ThemeLoadError(f"Can't read theme {path}: {e}") from e

  try:
    if str(path).endswith(".toml"):
      data = toml.loads(content)
    else:
      data = json.loads(content)
  except (ValueError, toml.TomlDecodeError) as e:
    raise ThemeLoadError(f"Corrupt theme file {path}: {e}") from e

  if not isinstance(data, dict):
    raise ThemeLoadError(f"Theme file {path} is not an object")
  return data


def merge_themes(parent, child):
  """Override ``parent`` by ``child`` and return a new theme.

  ``colors`` are merged key by key and the child's ``tokenColors`` are
  appended after the parent's, so later (child) rules win in the editor.
  Any other key is simply replaced.
  """
  merged = dict(parent)
  for k, v in child.items():
    old = parent.get(k)
    if k == "colors" and isinstance(v, dict) and isinstance(old, dict):
      merged[k] = {**old, **v}
    elif k == "tokenColors" and isinstance(v, list) and isinstance(old, list):
      merged[k] = old + v
    else:
      merged[k] = v # Override by child.
  return merged


def load_theme(path, _seen=()):
  real_path = os.path.realpath(path)
  if real_path in _seen:
    raise ThemeLoadError(f"Include cycle at {path}")

  theme = _read_theme(path)
  include = theme.pop("include", None)
  if include is None:
    return theme
  if not isinstance(include, str):
    raise ThemeLoadError(f"Theme {path} has a non-string include: {include!r}")

  parent_path = os.path.join(os.path.dirname(path), include)
  logger.debug("%s includes %s", path, parent_path)
  parent = load_theme(parent_path, _seen + (real_path,))
  return merge_themes(parent, theme)


# Colors are expanded one per line, every rule is collapsed into a single
# line. Monaco themes have hundreds of rules and this keeps them diffable.
def dumps_theme(theme):
  items = list(theme.items())
  lines = ["{"]
  for i, (k, v) in enumerate(items):
    comma = "," if i < len(items) - 1 else ""
    key = json.dumps(k)
    if k == "rules" and isinstance(v, list) and v:
      lines.append(f"  {key}: [")
      for j, rule in enumerate(v):
        rule_comma = "," if j < len(v) - 1 else ""
        lines.append("    " + json.dumps(rule, ensure_ascii=False) + rule_comma)
      lines.append("  ]" + comma)
    elif k == "colors" and isinstance(v, dict) and v:
      colors_dump = json.dumps(v, indent=2, ensure_ascii=False)
      colors_dump = "\n  ".join(colors_dump.split("\n"))
      lines.append(f"  {key}: {colors_dump}{comma}")
    else:
      lines.append(f"  {key}: {json.dumps(v, ensure_ascii=False)}{comma}")
  lines.append("}")
  return "\n".join(lines) + "\n"


def convert_file(src_path, dst_path):
  theme = load_theme(src_path)
  name = theme.get("name")
  if not isinstance(name, str) or not name:
    name = theme_name(src_path)

  monaco_theme = vs_to_monaco(theme, {"name" : name})

  # Written to a .tmp next to the target, then moved over it.
  out_dir = os.path.dirname(dst_path)
  tmp_path = str(dst_path) + ".tmp"
  try:
    if out_dir:
      os.makedirs(out_dir, exist_ok=True)
    with open(tmp_path, 'w', encoding="utf-8") as fo:
      fo.write(dumps_theme(monaco_theme))
    os.replace(tmp_path, dst_path)
  except OSError as e:
    if os.path.exists(tmp_path):
      try:
        os.remove(tmp_path)
      except OSError:
        logger.warning("Couldn't remove %s", tmp_path)
    raise ThemeWriteError(f"Can't write {dst_path}: {e}") from e

  logger.info("Converted: %s -> %s", os.path.basename(src_path), dst_path)
  return monaco_theme


def convert_files(src_paths, output_dir):
  """Convert each theme into ``output_dir``, skipping the ones that fail.

  Themes that map to an output already written in this run (``x.json`` and
  ``x.toml`` both give ``x.monaco-theme.json``) are skipped as well, the
  first one wins. Returns ``(written, failed)``.
  """
  written, failed = [], []
  used = {} # key: real output path, value: source that wrote it
  for src_path in src_paths:
    dst_path = os.path.join(output_dir, output_name(src_path))
    key = os.path.realpath(dst_path)
    if key in used:
      logger.error("Skipping %s: %s was already written from %s", src_path, dst_path, used[key])
      failed.append(src_path)
      continue
    try:
      convert_file(src_path, dst_path)
    except ThemeError as e:
      logger.error("Skipping %s: %s", src_path, e)
      failed.append(src_path)
      continue
    used[key] = src_path
    written.append(dst_path)
  return written, failed


def convert_dir(input_dir, output_dir):
  if not os.path.isdir(input_dir):
    raise ThemeLoadError(f"Theme directory not found: {input_dir}")

  src_paths = []
  for item in sorted(os.listdir(input_dir)):
    if not is_theme_file(item): continue
    src_path = os.path.join(input_dir, item)
    if not os.path.isfile(src_path): continue
    src_paths.append(src_path)
  return convert_files(src_paths, output_dir)


def load_config(path):
  config = {
    "input_dir"  : DEFAULT_INPUT_DIR,
    "output_dir" : DEFAULT_OUTPUT_DIR,
  }
  if not os.path.exists(path):
    return config

  try:
    with open(path, 'r', encoding="utf-8-sig") as fi:
      data = toml.loads(fi.read())
  except (OSError, UnicodeDecodeError, toml.TomlDecodeError) as e:
    raise ConfigError(f"Corrupt config file {path}: {e}") from e

  for k, v in data.items():
    if k not in CONFIG_KEYS:
      logger.warning("Unknown config key %r in %s", k, path)
      continue
    if not isinstance(v, str) or not v:
      raise ConfigError(f"Config key {k!r} in {path} must be a non-empty string")
    config[k] = v
  return config
