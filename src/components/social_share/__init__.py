"""
Social share component - share links generated on first publish.
"""

from ._impl import (
    POST_OVERVIEW_PAGE,
    SCRIPT_OBJECT_NAME,
    SHORTEN_FAILED,
    LinkGenerationService,
    ShareMeta,
    asset_handle,
    get_shortlink_base,
    is_post_overview,
    parse_bitlinks_body,
    plan_assets,
    validate_generate_input,
)
from .component import (
    METABOX_ID,
    METABOX_TITLE,
    InternalRequestInvoker,
    SocialShare,
    build_metabox_data,
    handle_bitlinks_request,
    resolve_post_url,
    run_generate,
    run_get_metabox,
    run_regenerate,
    run_set_activation,
)
from .models import (
    AssetPlan,
    GenerateLinksInput,
    GenerateLinksOutput,
    MetaboxData,
    MetaboxOutput,
    ScriptConfig,
    SetActivationInput,
    SetActivationOutput,
    ShareValidationError,
)
from .ports import (
    AssetRegistryPort,
    LinkGenerationInvokerPort,
    MetaboxRegistryPort,
)

__all__ = [
    # Feature
    "SocialShare",
    "InternalRequestInvoker",
    "LinkGenerationService",
    "ShareMeta",
    # Entry points
    "run_generate",
    "run_get_metabox",
    "run_regenerate",
    "run_set_activation",
    "handle_bitlinks_request",
    # Pure functions
    "asset_handle",
    "build_metabox_data",
    "get_shortlink_base",
    "is_post_overview",
    "parse_bitlinks_body",
    "plan_assets",
    "resolve_post_url",
    "validate_generate_input",
    # Constants
    "METABOX_ID",
    "METABOX_TITLE",
    "POST_OVERVIEW_PAGE",
    "SCRIPT_OBJECT_NAME",
    "SHORTEN_FAILED",
    # Models
    "AssetPlan",
    "GenerateLinksInput",
    "GenerateLinksOutput",
    "MetaboxData",
    "MetaboxOutput",
    "ScriptConfig",
    "SetActivationInput",
    "SetActivationOutput",
    "ShareValidationError",
    # Ports
    "AssetRegistryPort",
    "LinkGenerationInvokerPort",
    "MetaboxRegistryPort",
]
