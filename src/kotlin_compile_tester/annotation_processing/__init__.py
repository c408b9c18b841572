"""Annotation processing (kapt) exports."""

from .kapt_options_codec import decode_kapt_options, encode_kapt_options
from .kapt_plugin import (
    KAPT_PLUGIN_ID,
    KaptOption,
    KaptPluginConfig,
    PluginOption,
    configure_kapt,
    kapt_option,
)

__all__ = [
    "KAPT_PLUGIN_ID",
    "KaptOption",
    "KaptPluginConfig",
    "PluginOption",
    "configure_kapt",
    "kapt_option",
    "decode_kapt_options",
    "encode_kapt_options",
]
