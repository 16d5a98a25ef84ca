"""NuGet packages.config and SDK-style project file parsing."""

import re

from .models import Dependency
from .versions import clean_version

# packages.config: <package id="Newtonsoft.Json" version="13.0.1" />
_PACKAGES_CONFIG = re.compile(r'<package id="([^"]+)" version="([^"]+)"')
# *.csproj: <PackageReference Include="Serilog" Version="2.12.0" />
_PACKAGE_REFERENCE = re.compile(r'<PackageReference Include="([^"]+)" Version="([^"]+)"')


def parse_nuget(content: str) -> list[Dependency]:
    """Parse packages.config entries followed by PackageReference entries."""
    dependencies = []
    for pattern in (_PACKAGES_CONFIG, _PACKAGE_REFERENCE):
        for name, version in pattern.findall(content):
            dependencies.append(Dependency(name=name.strip(), version=clean_version(version.strip())))
    return dependencies
