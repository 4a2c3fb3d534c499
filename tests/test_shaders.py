import pytest

from oglkit.shaders import (
    DebugSeverity,
    DebugSource,
    DebugType,
    ShaderError,
    ShaderType,
    format_compile_error,
    format_debug_message,
    load_shader_source,
    shader_type_name,
)


@pytest.mark.parametrize(
    "shader_type, name",
    [
        (ShaderType.VERTEX, "VERTEX"),
        (ShaderType.FRAGMENT, "FRAGMENT"),
        (ShaderType.TESS_CONTROL, "TCONTROL"),
        (ShaderType.TESS_EVALUATION, "TEVAL"),
        (ShaderType.GEOMETRY, "GEOMETRY"),
        (ShaderType.COMPUTE, "COMPUTE"),
    ],
)
def test_shader_type_name(shader_type, name):
    assert shader_type_name(shader_type) == name


def test_shader_type_name_accepts_raw_codes():
    assert shader_type_name(int(ShaderType.GEOMETRY)) == "GEOMETRY"


def test_shader_type_name_rejects_unknown():
    with pytest.raises(ShaderError):
        shader_type_name(12345)


def test_load_shader_source_round_trip(tmp_path):
    code = "#version 460 core\nvoid main() {}\n"
    path = tmp_path / "basic.vert"
    path.write_text(code, encoding="utf-8")
    assert load_shader_source(ShaderType.VERTEX, path) == code


def test_load_shader_source_missing_file(tmp_path):
    with pytest.raises(ShaderError, match="Impossible to read"):
        load_shader_source(ShaderType.FRAGMENT, tmp_path / "missing.frag")


def test_load_shader_source_bad_type(tmp_path):
    path = tmp_path / "shader.glsl"
    path.write_text("void main() {}", encoding="utf-8")
    with pytest.raises(ShaderError, match="BAD shader type"):
        load_shader_source(1, path)


def test_format_compile_error_for_shader():
    text = format_compile_error("VERTEX", "basic.vert", "syntax error")
    lines = text.split("\n")
    assert lines[0] == "ERROR::SHADER_COMPILATION_ERROR of type: VERTEX"
    assert lines[1] == "Filename: basic.vert"
    assert lines[2] == "syntax error"
    assert text.endswith(" -- --------------------------------------------------- -- ")


def test_format_compile_error_for_program_without_filename():
    text = format_compile_error("PROGRAM", "", "link failed")
    assert text.startswith("ERROR::PROGRAM_LINKING_ERROR of type: PROGRAM\n")
    assert "Filename" not in text
    assert "link failed" in text


@pytest.mark.parametrize("message_id", [131169, 131185, 131218, 131204])
def test_format_debug_message_ignores_noise(message_id):
    assert (
        format_debug_message(
            DebugSource.API, DebugType.OTHER, message_id, DebugSeverity.LOW, "x"
        )
        is None
    )


def test_format_debug_message_full_report():
    text = format_debug_message(
        DebugSource.SHADER_COMPILER,
        DebugType.DEPRECATED_BEHAVIOR,
        42,
        DebugSeverity.HIGH,
        "oops",
    )
    assert text.split("\n") == [
        "---------------",
        "Debug message (42): oops",
        "Source: Shader Compiler",
        "Type: Deprecated Behaviour",
        "Severity: high",
        "",
        "",
    ]


def test_format_debug_message_unknown_codes_give_blank_lines():
    text = format_debug_message(1, 2, 7, 3, "msg")
    assert text.split("\n")[2:5] == ["", "", ""]


def test_format_debug_message_accepts_raw_codes():
    text = format_debug_message(
        int(DebugSource.APPLICATION),
        int(DebugType.MARKER),
        1,
        int(DebugSeverity.NOTIFICATION),
        "m",
    )
    assert "Source: Application" in text
    assert "Type: Marker" in text
    assert "Severity: notification" in text


def test_every_shader_type_has_distinct_name():
    names = [shader_type_name(member) for member in ShaderType]
    assert all(names)
    assert len(set(names)) == len(names)


def test_every_debug_code_has_distinct_line():
    source_lines = [
        format_debug_message(src, DebugType.OTHER, 1, DebugSeverity.LOW, "m").split(
            "\n"
        )[2]
        for src in DebugSource
    ]
    type_lines = [
        format_debug_message(DebugSource.API, kind, 1, DebugSeverity.LOW, "m").split(
            "\n"
        )[3]
        for kind in DebugType
    ]
    severity_lines = [
        format_debug_message(DebugSource.API, DebugType.OTHER, 1, sev, "m").split(
            "\n"
        )[4]
        for sev in DebugSeverity
    ]
    assert all(line.startswith("Source: ") for line in source_lines)
    assert all(line.startswith("Type: ") for line in type_lines)
    assert all(line.startswith("Severity: ") for line in severity_lines)
    for lines in (source_lines, type_lines, severity_lines):
        assert len(set(lines)) == len(lines)