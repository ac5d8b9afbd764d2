import logging

# This converts VS Code color themes (the parsed .color-theme.json object)
# into the theme data monaco.editor.defineTheme() accepts. Nothing here reads
# or writes files, see theme_files.py for that.

logger = logging.getLogger("monaco_theme")

# key: vscode theme "type", value: monaco "base"
BASE_MAP = {
  "light"    : "vs",
  "dark"     : "vs-dark",
  "hc"       : "hc-black",
  "hc-light" : "hc-light",
}
DEFAULT_BASE = "vs-dark"

RULE_COLOR_KEYS = ("foreground", "background")


def split_scopes(scope):
  """Return the individual TextMate scopes of a tokenColors "scope" value.

  A list is used as it is, a string is split on commas with the pieces
  trimmed and empty ones dropped. Anything else has no scopes.
  """
  if isinstance(scope, (list, tuple)):
    return list(scope)
  if not isinstance(scope, str):
    return []
  return [s.strip() for s in scope.split(",") if s.strip()]


# Monaco wants hex colors without the "#". Only one is removed.
def strip_hash(color):
  if color.startswith("#"):
    return color[1:]
  return color


def make_rules(token_colors):
  rules = []
  for entry in token_colors:
    if not isinstance(entry, dict): continue
    settings = entry.get("settings")
    if not isinstance(settings, dict):
      settings = {}

    for scope in split_scopes(entry.get("scope")):
      rule = {"token" : scope}
      for key in RULE_COLOR_KEYS:
        color = settings.get(key)
        if color and isinstance(color, str):
          rule[key] = strip_hash(color)
      if settings.get("fontStyle"):
        rule["fontStyle"] = settings["fontStyle"]
      rules.append(rule)
  return rules


def vs_to_monaco(vscode_theme, options=None):
  """Convert a VS Code color theme into Monaco IStandaloneThemeData.

  The result is a fresh dict::

    {"base": ..., "inherit": True, "rules": [...], "colors": {...}}

  Missing or malformed fields fall back to defaults so this never raises.
  ``options`` may carry a ``name`` which is only used for logging.
  """
  if not isinstance(options, dict):
    options = {}
  if not isinstance(vscode_theme, dict):
    vscode_theme = {}

  name = options.get("name") or vscode_theme.get("name") or "<unnamed>"

  theme_type = vscode_theme.get("type")
  base = DEFAULT_BASE
  if isinstance(theme_type, str) and theme_type in BASE_MAP:
    base = BASE_MAP[theme_type]
  elif theme_type is not None:
    logger.debug("theme %s: unknown type %r, using %s", name, theme_type, DEFAULT_BASE)

  token_colors = vscode_theme.get("tokenColors")
  if not isinstance(token_colors, (list, tuple)):
    token_colors = []
  rules = make_rules(token_colors)

  # Monaco uses the same color keys as VS Code for the subset it supports
  # and ignores the rest, so they're copied over untouched.
  colors = vscode_theme.get("colors")
  colors = dict(colors) if isinstance(colors, dict) else {}

  logger.debug("theme %s: %d rules, %d colors", name, len(rules), len(colors))
  return {
    "base"    : base,
    "inherit" : True,
    "rules"   : rules,
    "colors"  : colors,
  }
