"""
Tests for template compilation and rendering.
"""

from datetime import datetime

import pytest

from taglog.formatters import (
    Preset,
    Template,
    TemplateError,
    compile_template,
    resolve_template,
    template_from_options,
)
from taglog.options import (
    MSEC,
    LEVEL_BRACES,
    CALLER_FILE,
    CALLER_FUNC,
    CALLER_PKG,
    apply_options,
    template,
)
from taglog.records import CallerInfo, Level, LogRecord

TS = datetime(2018, 1, 7, 13, 2, 34, 123456)
CALLER = CallerInfo(file="pkg/mod.py", line=42, function="mod.Worker.run", package="mod")


def record(level=Level.INFO, message="hello", caller=CALLER, ts=TS):
    return LogRecord(timestamp=ts, level=level, message=message, caller=caller)


# ═══════════════════════════════════════════════════════════════════
#  template_from_options
# ═══════════════════════════════════════════════════════════════════

class TestTemplateFromOptions:
    @pytest.mark.parametrize("options, expected", [
        ([], "{dt:%Y/%m/%d %H:%M:%S} {level} {message}"),
        ([MSEC], "{dt:%Y/%m/%d %H:%M:%S.%L} {level} {message}"),
        ([MSEC, LEVEL_BRACES], "{dt:%Y/%m/%d %H:%M:%S.%L} [{level}] {message}"),
        ([CALLER_FILE],
         "{dt:%Y/%m/%d %H:%M:%S} {level} ({caller_file}:{caller_line}) {message}"),
        ([CALLER_FILE, CALLER_FUNC, MSEC],
         "{dt:%Y/%m/%d %H:%M:%S.%L} {level} ({caller_file}:{caller_line} {caller_func}) {message}"),
        ([CALLER_FUNC, CALLER_PKG, MSEC, LEVEL_BRACES],
         "{dt:%Y/%m/%d %H:%M:%S.%L} [{level}] ({caller_func} {caller_pkg}) {message}"),
    ])
    def test_templates(self, options, expected):
        assert template_from_options(apply_options(options)) == expected

    def test_explicit_template_wins(self):
        settings = apply_options([CALLER_FILE, template(Preset.SHORT)])
        assert resolve_template(settings) == Preset.SHORT.value

    def test_explicit_template_source_unchanged_by_braces(self):
        settings = apply_options([template(Preset.FUNC_DEBUG), LEVEL_BRACES])
        assert resolve_template(settings) == Preset.FUNC_DEBUG.value


class TestLevelBracesOnTemplate:
    def test_applied_to_preset(self):
        tmpl = compile_template(Preset.FUNC_DEBUG, level_braces=True)
        assert tmpl.render(record()) == "2018/01/07 13:02:34.123 [INFO]  (mod.Worker.run) hello\n"

    def test_not_doubled(self):
        tmpl = compile_template("[{level}] {message}", level_braces=True)
        assert tmpl.render(record()) == "[INFO]  hello\n"

    def test_escaped_level_left_alone(self):
        tmpl = compile_template("{dt:%H:%M:%S} {{level}} {level} {message}", level_braces=True)
        assert tmpl.render(record()) == "13:02:34 {level} [INFO]  hello\n"

    def test_only_first_level_bracketed(self):
        tmpl = compile_template("{level}|{level}", level_braces=True)
        assert tmpl.render(record()) == "[INFO] |INFO \n"

    def test_level_with_spec_left_alone(self):
        tmpl = compile_template("{level:>6} {message}", level_braces=True)
        assert tmpl.render(record()) == "  INFO hello\n"

    def test_repr(self):
        assert repr(Template("{level}", level_braces=True)) == "Template('{level}', level_braces=True)"


# ═══════════════════════════════════════════════════════════════════
#  Presets
# ═══════════════════════════════════════════════════════════════════

class TestPreset:
    @pytest.mark.parametrize("name", ["full_debug", "FULL_DEBUG", "full-debug", " Full_Debug "])
    def test_from_name(self, name):
        assert Preset.from_name(name) is Preset.FULL_DEBUG

    def test_from_name_invalid(self):
        with pytest.raises(ValueError, match="Unknown template preset"):
            Preset.from_name("verbose")

    @pytest.mark.parametrize("preset, expected", [
        (Preset.SHORT, "2018/01/07 13:02:34 INFO  hello\n"),
        (Preset.WITH_MSEC, "2018/01/07 13:02:34.123 INFO  hello\n"),
        (Preset.WITH_PKG, "2018/01/07 13:02:34.123 INFO  (mod) hello\n"),
        (Preset.SHORT_DEBUG, "2018/01/07 13:02:34.123 INFO  (pkg/mod.py:42) hello\n"),
        (Preset.FUNC_DEBUG, "2018/01/07 13:02:34.123 INFO  (mod.Worker.run) hello\n"),
        (Preset.FULL_DEBUG, "2018/01/07 13:02:34.123 INFO  (pkg/mod.py:42 mod.Worker.run) hello\n"),
    ])
    def test_render(self, preset, expected):
        assert compile_template(preset).render(record()) == expected

    def test_caller_usage(self):
        assert not compile_template(Preset.SHORT).uses_caller
        assert not compile_template(Preset.WITH_MSEC).uses_caller
        for preset in (Preset.WITH_PKG, Preset.SHORT_DEBUG, Preset.FUNC_DEBUG, Preset.FULL_DEBUG):
            assert compile_template(preset).uses_caller


# ═══════════════════════════════════════════════════════════════════
#  Rendering
# ═══════════════════════════════════════════════════════════════════

class TestRender:
    @pytest.mark.parametrize("level, expected", [
        (Level.TRACE, "TRACE|"),
        (Level.INFO, "INFO |"),
        (Level.WARN, "WARN |"),
        (Level.ERROR, "ERROR|"),
    ])
    def test_level_padding(self, level, expected):
        assert Template("{level}|").render(record(level=level)) == expected + "\n"

    @pytest.mark.parametrize("level, expected", [
        (Level.INFO, "[INFO] |"),
        (Level.PANIC, "[PANIC]|"),
    ])
    def test_bracketed_level_padding(self, level, expected):
        assert Template("[{level}]|").render(record(level=level)) == expected + "\n"

    def test_level_with_spec_not_padded(self):
        assert Template("{level:>7}").render(record()) == "   INFO\n"

    def test_dt_default_format(self):
        assert Template("{dt}").render(record()) == "2018/01/07 13:02:34\n"

    def test_msec_directive(self):
        ts = datetime(2018, 1, 7, 13, 2, 34, 7000)
        assert Template("{dt:%H:%M:%S.%L}").render(record(ts=ts)) == "13:02:34.007\n"

    def test_escaped_percent_before_l(self):
        assert Template("{dt:%H:%M:%S %%L}").render(record()) == "13:02:34 %L\n"

    def test_escaped_percent_then_msec(self):
        assert Template("{dt:%S %%%L}").render(record()) == "34 %123\n"

    def test_microseconds_still_work(self):
        assert Template("{dt:%S.%f}").render(record()) == "34.123456\n"

    def test_unresolved_caller_is_empty(self):
        out = Template("({caller_file}:{caller_line} {caller_func} {caller_pkg}) {message}")
        assert out.render(record(caller=CallerInfo())) == "(:  ) hello\n"

    def test_caller_line_spec(self):
        assert Template("{caller_line:>4}|").render(record()) == "  42|\n"
        assert Template("{caller_line:>4}|").render(record(caller=CallerInfo())) == "|\n"

    def test_escaped_braces(self):
        assert Template("{{{message}}}").render(record()) == "{hello}\n"

    def test_exactly_one_newline(self):
        assert Template("{message}").render(record(message="x")) == "x\n"

    def test_fields(self):
        tmpl = Template("{dt} {caller_func} {message}")
        assert tmpl.fields == {"dt", "caller_func", "message"}
        assert tmpl.uses_caller


# ═══════════════════════════════════════════════════════════════════
#  Compile errors
# ═══════════════════════════════════════════════════════════════════

class TestTemplateErrors:
    @pytest.mark.parametrize("source, match", [
        ("{dt} {lvl} {message}", "Unknown field"),
        ("{} {message}", "Unknown field"),
        ("{dt.year}", "Unknown field"),
        ("{message!r}", "Conversion"),
        ("{dt {message}", "Malformed"),
        ("{message", "Malformed"),
        ("message}", "Malformed"),
        ("{message:d}", "Bad format spec"),
    ])
    def test_rejected(self, source, match):
        with pytest.raises(TemplateError, match=match):
            Template(source)

    def test_is_value_error(self):
        assert issubclass(TemplateError, ValueError)

    def test_non_string(self):
        with pytest.raises(TemplateError, match="Expected template string"):
            compile_template(42)
