"""
Test that all the main files can be imported
"""


def test_main() -> None:
    import corecount.__main__  # noqa: F401


def test_platform_modules() -> None:
    import corecount.platform.darwin  # noqa: F401
    import corecount.platform.linux  # noqa: F401
    import corecount.platform.unix  # noqa: F401
    import corecount.platform.windows  # noqa: F401
