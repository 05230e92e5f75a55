import string

from corecount import VERSION_STRING


def test_version_string() -> None:
    """
    Assert proper formatting of the version string: v<major>.<minor>.<patch>(-<descr>)
    """

    # No special characters
    assert set(VERSION_STRING).issubset(f"v{string.digits}.-{string.ascii_letters}")

    # Version starts with v
    assert VERSION_STRING[0] == "v"

    main_version, *rest = VERSION_STRING[1:].split("-")

    major, minor, patch = main_version.split(".")

    # Properly formatted numbers
    for number in (major, minor, patch):
        assert str(int(number)) == number
