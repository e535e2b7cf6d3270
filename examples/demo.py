"""
taglog demo.

Shows:
1. Default logger → INFO/WARN on stdout, ERROR on stdout + stderr
2. Presets with caller info
3. A wrapper compensated with caller_depth
4. YAML configuration
5. PANIC with a fatal action that does not exit

Run:
    python examples/demo.py
"""

from taglog import (
    DEBUG,
    Logger,
    LoggerConfig,
    Preset,
    caller_depth,
    fatal_action,
    printf,
    template,
)


def main():
    print("=" * 60)
    print("  taglog demo")
    print("=" * 60)

    # ── 1. Default logger ─────────────────────────────────────
    print("\n[1/5] Default logger")
    printf("plain message is INFO")
    printf("WARN disk at %d%%", 91)
    printf("[DEBUG] hidden, DEBUG not enabled")
    printf("[ERROR] shows on stdout and stderr")

    # ── 2. Caller info ────────────────────────────────────────
    print("\n[2/5] FULL_DEBUG preset")
    log = Logger(DEBUG, template(Preset.FULL_DEBUG))
    log.logf("[DEBUG] loaded %d rows", 1200)

    # ── 3. Wrapper ────────────────────────────────────────────
    print("\n[3/5] Wrapper with caller_depth(1)")
    wrapped = Logger(DEBUG, template(Preset.SHORT_DEBUG), caller_depth(1))

    def audit(event):
        wrapped.logf("[INFO] audit: %s", event)

    audit("login")  # reported at this line, not inside audit()

    # ── 4. YAML ───────────────────────────────────────────────
    print("\n[4/5] From YAML")
    config = LoggerConfig.from_yaml_string("""
logger:
  level: DEBUG
  template: func_debug
  level_braces: true
""")
    config.build().logf("DEBUG configured from yaml")

    # ── 5. PANIC ──────────────────────────────────────────────
    print("\n[5/5] PANIC with a non-exiting fatal action")
    safe = Logger(fatal_action(lambda: print("(fatal action ran, process kept alive)")))
    safe.logf("[PANIC] something unrecoverable: %s", "demo")


if __name__ == "__main__":
    main()
