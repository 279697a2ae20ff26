import pytest

from bitdataview import BitDataView


def test_cli_parser_accepts_subcommands(m):
    parser = m.get_parser()
    ns = parser.parse_args(["dump", "f.bin", "--msb"])
    assert ns.cmd == "dump" and ns.msb
    ns = parser.parse_args(["r", "f.bin", "-t", "uint", "-w", "8", "-o", "3"])
    assert ns.cmd in ("read", "r")
    assert (ns.type, ns.width, ns.offset, ns.until) == ("uint", 8, 3, False)
    ns = parser.parse_args(
        ["write", "f.bin", "-t", "float64", "-o", "0", "--value", "1.5",
         "--big-endian"]
    )
    assert ns.big_endian and ns.value == "1.5"


def test_parse_value(m):
    assert m._parse_value("uint", "0x10") == 16
    assert m._parse_value("int", "-5") == -5
    assert m._parse_value("bit", "1") == 1
    assert m._parse_value("float32", "2.5") == 2.5
    with pytest.raises(m.BitTypeError):
        m._parse_value("uint", "zz")


def test_read_and_write_field_helpers(m):
    view = BitDataView()
    view.push_nothing(64)
    m.write_field(view, "uint", 4, 0x5A, width=8)
    assert m.read_field(view, "uint", 4, width=8) == 0x5A
    m.write_field(view, "float64", 0, -2.0, until=True)
    assert m.read_field(view, "float64", 0, until=True) == -2.0
    m.write_field(view, "bit", 63, 1)
    assert m.read_field(view, "bit", 0, until=True) is True


def test_dump(sample_file, m, capsys):
    assert m.main(["dump", str(sample_file)]) == 0
    out = capsys.readouterr().out.strip()
    assert len(out) == 48
    assert out.startswith("00011110")

    assert m.main(["dump", str(sample_file), "--msb"]) == 0
    assert capsys.readouterr().out.startswith("01111000")


def test_info(sample_file, m, capsys):
    assert m.main(["info", str(sample_file)]) == 0
    assert capsys.readouterr().out.strip() == (
        "BitDataView(shifted_bit_count=0, pushed_bit_count=48, "
        "stored_bit_count=48, bit_capacity=48)"
    )


@pytest.mark.parametrize(
    "extra, expected",
    [
        (["-t", "uint", "-w", "32", "-o", "0"], "305419896"),
        (["-t", "uint", "-w", "32", "-o", "0", "--big-endian"], "2018915346"),
        (["-t", "int", "-w", "8", "-o", "32"], "-1"),
        (["-t", "bit", "-o", "3"], "1"),
        (["-t", "byte", "-w", "8", "-o", "0", "--until"], "0"),
        (["-t", "big_uint", "-w", "16", "-o", "8", "--until"], "65298"),
    ],
)
def test_read(sample_file, m, capsys, extra, expected):
    assert m.main(["read", str(sample_file)] + extra) == 0
    assert capsys.readouterr().out.strip() == expected


def test_write_patches_in_place(sample_file, m):
    code = m.main([
        "write", str(sample_file), "-t", "uint", "-w", "16", "-o", "8",
        "--value", "0xBEEF",
    ])
    assert code == 0
    assert sample_file.read_bytes() == bytes(
        [0x78, 0xEF, 0xBE, 0x12, 0xFF, 0x00]
    )


def test_write_msb_keeps_raw_layout(sample_file, m):
    code = m.main([
        "write", str(sample_file), "-t", "byte", "-w", "8", "-o", "40",
        "--value", "1", "--msb",
    ])
    assert code == 0
    assert sample_file.read_bytes() == bytes(
        [0x78, 0x56, 0x34, 0x12, 0xFF, 0x80]
    )


def test_write_big_endian_float(sample_file, m):
    code = m.main([
        "write", str(sample_file), "-t", "float32", "-o", "0",
        "--value", "1.0", "--big-endian",
    ])
    assert code == 0
    assert sample_file.read_bytes()[:4] == b"\x3f\x80\x00\x00"


def test_missing_width_is_usage_error(sample_file, m):
    with pytest.raises(SystemExit) as exc:
        m.main(["read", str(sample_file), "-t", "uint", "-o", "0"])
    assert exc.value.code == 2


def test_missing_file(tmp_path, m, capsys):
    assert m.main(["info", str(tmp_path / "nope.bin")]) == 1
    assert "[!] File not found" in capsys.readouterr().err


@pytest.mark.parametrize(
    "argv",
    [
        ["read", "-t", "uint", "-w", "32", "-o", "40"],
        ["write", "-t", "uint", "-w", "4", "-o", "0", "--value", "16"],
        ["write", "-t", "int", "-w", "8", "-o", "0", "--value", "xyz"],
    ],
)
def test_library_errors_exit_1(sample_file, m, capsys, argv):
    before = sample_file.read_bytes()
    argv = argv[:1] + [str(sample_file)] + argv[1:]
    assert m.main(argv) == 1
    assert capsys.readouterr().err.startswith("[!]")
    assert sample_file.read_bytes() == before


def test_verbose_flag(sample_file, m):
    assert m.main(["-v", "info", str(sample_file)]) == 0
