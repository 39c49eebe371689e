"""Static compatibility table and display metadata for the configuration axes."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, NamedTuple

from walrus_starter.models import SDK, Framework, UseCase


class SDKSupport(NamedTuple):
    """Frameworks and use cases an SDK can be combined with, in display order."""
    frameworks: tuple[Framework, ...]
    use_cases: tuple[UseCase, ...]


class SDKInfo(NamedTuple):
    package: str
    description: str
    docs: str


PRIMARY_SDK = SDK.MYSTEN

COMPATIBILITY_MATRIX: Mapping[SDK, SDKSupport] = MappingProxyType({
    SDK.MYSTEN: SDKSupport(
        frameworks=(Framework.REACT, Framework.VUE, Framework.PLAIN_TS),
        use_cases=(UseCase.SIMPLE_UPLOAD, UseCase.GALLERY, UseCase.DEFI_NFT),
    ),
    SDK.TUSKY: SDKSupport(
        frameworks=(Framework.REACT,),
        use_cases=(UseCase.SIMPLE_UPLOAD, UseCase.GALLERY),
    ),
    SDK.HIBERNUTS: SDKSupport(
        frameworks=(Framework.REACT,),
        use_cases=(UseCase.SIMPLE_UPLOAD,),
    ),
})

# Values that are released today.  Everything else in the matrix is planned.
STABLE_VALUES: Mapping[str, frozenset[str]] = MappingProxyType({
    "sdk": frozenset({SDK.MYSTEN.value}),
    "framework": frozenset({Framework.REACT.value}),
    "use_case": frozenset({UseCase.SIMPLE_UPLOAD.value, UseCase.GALLERY.value}),
})

SDK_METADATA: Mapping[SDK, SDKInfo] = MappingProxyType({
    SDK.MYSTEN: SDKInfo(
        package="@mysten/walrus",
        description="Official Mysten Labs SDK (Testnet stable)",
        docs="https://docs.walrus.site",
    ),
    SDK.TUSKY: SDKInfo(
        package="@tusky-io/ts-sdk",
        description="Community TypeScript SDK",
        docs="https://github.com/tusky-io",
    ),
    SDK.HIBERNUTS: SDKInfo(
        package="@hibernuts/walrus-sdk",
        description="Alternative Walrus SDK",
        docs="https://github.com/hibernuts",
    ),
})

FRAMEWORK_LABELS: Mapping[Framework, str] = MappingProxyType({
    Framework.REACT: "React + Vite",
    Framework.VUE: "Vue + Vite",
    Framework.PLAIN_TS: "Plain TypeScript",
})

USE_CASE_LABELS: Mapping[UseCase, str] = MappingProxyType({
    UseCase.SIMPLE_UPLOAD: "Simple Upload (Single file)",
    UseCase.GALLERY: "File Gallery (Multiple files)",
    UseCase.DEFI_NFT: "DeFi/NFT Metadata",
})


def allowed_frameworks(sdk: SDK) -> tuple[Framework, ...]:
    return COMPATIBILITY_MATRIX[sdk].frameworks


def allowed_use_cases(sdk: SDK) -> tuple[UseCase, ...]:
    return COMPATIBILITY_MATRIX[sdk].use_cases
