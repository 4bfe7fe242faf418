"""Unit tests for the resourcepool.version module."""

import resourcepool
from resourcepool import version as version_module


class TestVersionModule:

    def test_metadata_constants_exist_and_have_correct_types(self) -> None:
        assert isinstance(version_module.__version__, str)
        assert isinstance(version_module.__version_info__, tuple)
        assert isinstance(version_module.__author__, str)
        assert isinstance(version_module.__license__, str)
        assert isinstance(version_module.__description__, str)

    def test_derived_constants_are_correct(self) -> None:
        assert version_module.MAJOR == version_module.__version_info__[0]
        assert version_module.MINOR == version_module.__version_info__[1]
        assert version_module.PATCH == version_module.__version_info__[2]
        assert version_module.__version__ == ".".join(map(str, version_module.__version_info__))

    def test_package_exports_version(self) -> None:
        assert resourcepool.__version__ == version_module.get_version()
        assert version_module.get_version_info() == version_module.__version_info__

    def test_public_names(self) -> None:
        assert all(hasattr(version_module, name) for name in version_module.__all__)
        assert not hasattr(version_module, "is_stable")
        assert not hasattr(version_module, "is_development")
