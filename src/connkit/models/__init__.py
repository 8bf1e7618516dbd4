from connkit.models.automation import (
    ConnectionTask,
    CustomProperty,
    LogConfig,
    PropertyType,
    WolConfig,
)
from connkit.models.cluster import Cluster, Variable
from connkit.models.connection import Connection, PasswordSource, WindowMode
from connkit.models.document import FORMAT_VERSION, NativeDocument
from connkit.models.group import ConnectionGroup
from connkit.models.protocol import (
    AgentKeySource,
    ClientMode,
    DefaultKeySource,
    FileKeySource,
    PerformanceMode,
    ProtocolConfig,
    ProtocolType,
    RdpConfig,
    RdpGateway,
    Resolution,
    SharedFolder,
    SpiceConfig,
    SpiceImageCompression,
    SshAuthMethod,
    SshConfig,
    VncConfig,
    ZeroTrustConfig,
    default_config_for,
)
from connkit.models.template import ConnectionTemplate
from connkit.models.validation import (
    validate_cluster,
    validate_connection,
    validate_group,
    validate_group_hierarchy,
    validate_template,
)
from connkit.models.zerotrust import (
    AwsSsmConfig,
    AzureBastionConfig,
    AzureSshConfig,
    BoundaryConfig,
    CloudflareAccessConfig,
    GcpIapConfig,
    GenericZeroTrustConfig,
    OciBastionConfig,
    TailscaleSshConfig,
    TeleportConfig,
    ZeroTrustProvider,
)

__all__ = [
    "AgentKeySource",
    "AwsSsmConfig",
    "AzureBastionConfig",
    "AzureSshConfig",
    "BoundaryConfig",
    "ClientMode",
    "CloudflareAccessConfig",
    "Cluster",
    "Connection",
    "ConnectionGroup",
    "ConnectionTask",
    "ConnectionTemplate",
    "CustomProperty",
    "DefaultKeySource",
    "FORMAT_VERSION",
    "FileKeySource",
    "GcpIapConfig",
    "GenericZeroTrustConfig",
    "LogConfig",
    "NativeDocument",
    "OciBastionConfig",
    "PasswordSource",
    "PerformanceMode",
    "PropertyType",
    "ProtocolConfig",
    "ProtocolType",
    "RdpConfig",
    "RdpGateway",
    "Resolution",
    "SharedFolder",
    "SpiceConfig",
    "SpiceImageCompression",
    "SshAuthMethod",
    "SshConfig",
    "TailscaleSshConfig",
    "TeleportConfig",
    "Variable",
    "VncConfig",
    "WindowMode",
    "WolConfig",
    "ZeroTrustConfig",
    "ZeroTrustProvider",
    "default_config_for",
    "validate_cluster",
    "validate_connection",
    "validate_group",
    "validate_group_hierarchy",
    "validate_template",
]
