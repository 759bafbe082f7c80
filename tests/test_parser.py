# tests/test_parser.py
import pytest

from heatsim_core import (
    GridSpec,
    ConfigReadError,
    ConfigParseError,
    ConfigFieldError,
    ControlScriptError,
)

# --- Fixtures for YAML Content ---

SETTINGS = """\
ambient_temp: 20.0
max_timestep: 1.0
min_timestep: 0.5
max_step_tempchange: 2.5
"""


@pytest.fixture
def basic_script():
    """Valid two-document script: settings, then directives."""
    return SETTINGS + """\
---
- wait: 10
- plot
- wait: 5
- plot
"""


class TestDirectives:

    def test_wait_and_plot_accumulation(self, parser, basic_script):
        script = parser.parse_string(basic_script)
        assert script.config.plot_times == (10.0, 15.0)
        assert script.config.sim_time == 15.0

    def test_settings_mapped_to_config(self, parser, basic_script):
        config = parser.parse_string(basic_script).config
        assert config.ambient_temperature == 20.0
        assert config.max_dt == 1.0
        assert config.min_dt == 0.5
        assert config.max_delta_T == 2.5

    def test_single_document_two_element_list(self, parser):
        script = parser.parse_string("""
- {ambient_temp: 0, max_timestep: 2, min_timestep: 1, max_step_tempchange: 1}
- [plot, {wait: 3}, plot]
""")
        assert script.config.plot_times == (0.0, 3.0)
        assert script.config.sim_time == 3.0

    def test_empty_directive_list(self, parser):
        script = parser.parse_string(SETTINGS + "---\n[]\n")
        assert script.config.sim_time == 0.0
        assert script.config.plot_times == ()

    def test_wait_accepts_duration_with_units(self, parser):
        script = parser.parse_string(SETTINGS + "---\n- wait: 2 min\n- plot\n- wait: '500 ms'\n")
        assert script.config.plot_times == (120.0,)
        assert script.config.sim_time == pytest.approx(120.5)

    def test_duplicate_plots_are_kept(self, parser):
        script = parser.parse_string(SETTINGS + "---\n- wait: 1\n- plot\n- plot\n")
        assert script.config.plot_times == (1.0, 1.0)

    @pytest.mark.parametrize("entry, index", [
        ("- wait: 1\n- plott\n", 1),
        ("- {wait: 1, plot: 2}\n", 0),
        ("- wait: 1\n- wait: -4\n", 1),
        ("- wait: xyzzy\n", 0),
        ("- wait: 5 m\n", 0),
        ("- wait: true\n", 0),
        ("- 42\n", 0),
        ("- [plot]\n", 0),
    ])
    def test_invalid_directive_names_index(self, parser, entry, index):
        with pytest.raises(ControlScriptError) as exc_info:
            parser.parse_string(SETTINGS + "---\n" + entry)
        err = exc_info.value
        assert err.index == index
        assert f"index {index}" in str(err)
        assert "Invalid Control Script Directive" in err.get_diagnostic_report()

    def test_invalid_directive_message_contains_entry(self, parser):
        with pytest.raises(ControlScriptError, match="plott"):
            parser.parse_string(SETTINGS + "---\n- plott\n")


class TestSettingsValidation:

    @pytest.mark.parametrize("missing", ["ambient_temp", "max_timestep", "min_timestep", "max_step_tempchange"])
    def test_missing_required_field(self, parser, missing):
        settings = "\n".join(line for line in SETTINGS.splitlines() if not line.startswith(missing))
        with pytest.raises(ConfigFieldError) as exc_info:
            parser.parse_string(settings + "\n---\n- plot\n")
        assert missing in exc_info.value.errors
        assert missing in str(exc_info.value)

    @pytest.mark.parametrize("value", ["xyzzy", "true", "[1, 2]", "'5'"])
    def test_non_numeric_field(self, parser, value):
        settings = SETTINGS.replace("ambient_temp: 20.0", f"ambient_temp: {value}")
        with pytest.raises(ConfigFieldError, match="ambient_temp"):
            parser.parse_string(settings + "---\n- plot\n")

    def test_min_timestep_above_max(self, parser):
        settings = SETTINGS.replace("min_timestep: 0.5", "min_timestep: 2.0")
        with pytest.raises(ConfigFieldError, match="min_dt"):
            parser.parse_string(settings + "---\n- plot\n")

    def test_unknown_field_rejected(self, parser):
        with pytest.raises(ConfigFieldError, match="unknown field"):
            parser.parse_string(SETTINGS + "threads: 4\n---\n- plot\n")

    def test_report_lists_every_issue(self, parser):
        with pytest.raises(ConfigFieldError) as exc_info:
            parser.parse_string("ambient_temp: x\n---\n- plot\n")
        report = exc_info.value.get_diagnostic_report()
        assert "Control Script Field Error" in report
        assert "max_timestep" in report
        assert "min_timestep" in report


class TestGeometry:

    def test_defaults_reproduce_reference_cube(self, parser, basic_script):
        script = parser.parse_string(basic_script)
        assert script.grid_spec == GridSpec()
        assert script.output_prefix == "block"

    def test_geometry_with_units(self, parser):
        script = parser.parse_string(SETTINGS + """\
output_prefix: slab
geometry:
  origin: [1.0, 2.0, 3.0]
  extent: ["2 cm", "20 mm", 20000]
  pitch: "1 mm"
  initial_temp: 80
  conductivity: 0.5
---
- plot
""")
        spec = script.grid_spec
        assert spec.origin == (1.0, 2.0, 3.0)
        assert spec.extent == (20000, 20000, 20000)
        assert spec.pitch == 1000
        assert spec.initial_temperature == 80.0
        assert spec.conductivity == 0.5
        assert script.output_prefix == "slab"

    @pytest.mark.parametrize("geometry", [
        "geometry: {pitch: '3 s'}",
        "geometry: {extent: [1, 2]}",
        "geometry: {conductivity: -1}",
        "geometry: {origin: [0, 0, zero]}",
        "geometry: {extent: [.inf, 3, 3]}",
        "geometry: {pitch: .nan}",
    ])
    def test_invalid_geometry(self, parser, geometry):
        with pytest.raises(ConfigFieldError, match="geometry"):
            parser.parse_string(SETTINGS + geometry + "\n---\n- plot\n")


class TestLoading:

    def test_parse_file(self, parser, write_script, basic_script):
        path = write_script(basic_script)
        script = parser.parse(path)
        assert script.source_path == path.resolve()
        assert script.config.sim_time == 15.0

    def test_missing_file(self, parser, tmp_path):
        with pytest.raises(ConfigReadError, match="not found"):
            parser.parse(tmp_path / "absent.yaml")

    def test_invalid_yaml_syntax(self, parser):
        with pytest.raises(ConfigParseError, match="Invalid YAML syntax"):
            parser.parse_string("ambient_temp: [1, 2\n")

    def test_empty_script(self, parser):
        with pytest.raises(ConfigParseError, match="empty"):
            parser.parse_string("")

    @pytest.mark.parametrize("content", [
        SETTINGS,
        SETTINGS + "---\n- plot\n---\n- plot\n",
    ])
    def test_wrong_section_count(self, parser, content):
        with pytest.raises(ConfigParseError, match="two sections"):
            parser.parse_string(content)

    def test_settings_not_a_mapping(self, parser):
        with pytest.raises(ConfigParseError, match="mapping"):
            parser.parse_string("- 1\n---\n- plot\n")

    def test_directives_not_a_list(self, parser):
        with pytest.raises(ConfigParseError, match="list of directives"):
            parser.parse_string(SETTINGS + "---\nwait: 5\n")
