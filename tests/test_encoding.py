from recnorm.encoding import decode_input, validate_fields, validate_text


def test_valid_text_unchanged():
    value = "Montréal, 東京"
    assert validate_text(value) is value


def test_invalid_run_becomes_one_marker():
    text, used = decode_input(b"ab\xff\xfe\xfdcd")
    assert used == "utf-8"
    assert validate_text(text) == "ab�cd"


def test_separate_runs_each_replaced():
    text, _ = decode_input(b"\xffa\xffb")
    assert validate_text(text) == "�a�b"


def test_truncated_multibyte_sequence():
    # first two bytes of a three-byte sequence
    text, _ = decode_input("x€".encode("utf-8")[:-1])
    assert validate_text(text) == "x�"


def test_validate_fields_in_place():
    fields = ["ok", "bad\udc80", ""]
    out = validate_fields(fields)
    assert out is fields
    assert fields == ["ok", "bad�", ""]


def test_detect_encoding_latin1():
    raw = "name,city\nPaul,Montréal\n".encode("latin-1")
    text, used = decode_input(raw, detect_encoding=True)
    assert "Montréal" in text
    assert used != "utf-8"


def test_detect_encoding_keeps_utf8():
    raw = "name,city\nPaul,Montréal\n".encode("utf-8")
    text, used = decode_input(raw, detect_encoding=True)
    assert used == "utf-8"
    assert "Montréal" in text
