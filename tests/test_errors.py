import pytest

from silica.errors import (
    BadIndexError,
    BadValueError,
    CorruptedFormatError,
    InvalidValueError,
    LzoError,
    MissingKeyError,
    NsArchiveError,
    SilicaError,
    TypeMismatchError,
)


def test_type_mismatch_message_and_key():
    err = TypeMismatchError("size")
    assert str(err) == "Type mismatch: key size"
    assert err.key == "size"


def test_missing_key_message():
    err = MissingKeyError("$version")
    assert str(err) == "Missing key $version"
    assert err.key == "$version"


def test_bad_value_message():
    err = BadValueError("orientation", "9")
    assert str(err) == "Bad value for key orientation = 9"
    assert (err.key, err.value) == ("orientation", "9")


def test_bad_index_message():
    assert str(BadIndexError()) == "Bad index"


def test_default_messages():
    assert str(InvalidValueError()) == "Invalid values in file"
    assert str(CorruptedFormatError()) == "Corrupted format"


def test_lzo_error_wraps_reason():
    err = LzoError("input overrun")
    assert str(err) == "LZO error: input overrun"
    assert err.reason == "input overrun"


@pytest.mark.parametrize(
    "error_cls, args, message",
    [
        (TypeMismatchError, ("k",), "Type mismatch: key k"),
        (MissingKeyError, ("k",), "Missing key k"),
        (BadValueError, ("k", "v"), "Bad value for key k = v"),
        (BadIndexError, (), "Bad index"),
    ],
)
def test_archive_errors_are_silica_errors(error_cls, args, message):
    error = error_cls(*args)
    with pytest.raises(NsArchiveError) as excinfo:
        raise error
    assert excinfo.value is error
    assert str(excinfo.value) == message
    assert isinstance(excinfo.value, SilicaError)


@pytest.mark.parametrize(
    "error_cls, args, message",
    [
        (InvalidValueError, (), "Invalid values in file"),
        (CorruptedFormatError, (), "Corrupted format"),
        (LzoError, ("x",), "LZO error: x"),
    ],
)
def test_file_errors_are_not_archive_errors(error_cls, args, message):
    error = error_cls(*args)
    assert str(error) == message
    assert isinstance(error, SilicaError)
    assert not isinstance(error, NsArchiveError)
    with pytest.raises(SilicaError) as excinfo:
        raise error
    assert excinfo.value is error