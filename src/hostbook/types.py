"""Core type definitions for hostbook."""

from enum import Enum

from pydantic import BaseModel

DEFAULT_ICON = "network-server"


class HostStatus(str, Enum):
    """Liveness of a host, filled in by a reachability check."""

    UNKNOWN = "unknown"
    ONLINE = "online"
    OFFLINE = "offline"
    CHECKING = "checking"


class Command(BaseModel):
    """A quick-launch command attached to a host."""

    name: str = ""
    cmd: str

    def to_directive(self) -> str:
        """Render the value of a `# Command` line."""
        if self.name:
            return f"[{self.name}] {self.cmd}"
        return self.cmd


class Option(BaseModel):
    """An SSH directive without a dedicated Host field (ProxyJump, ForwardAgent, ...)."""

    key: str
    value: str = ""


class Host(BaseModel):
    """A managed SSH destination."""

    alias: str
    hostname: str = ""
    user: str = ""
    port: str = ""  # kept as text, ssh validates it
    identity_file: str = ""
    icon: str = DEFAULT_ICON
    status: HostStatus = HostStatus.UNKNOWN
    mac: str = ""
    commands: list[Command] = []
    options: list[Option] = []

    def model_post_init(self, __context):
        if not self.hostname:
            self.hostname = self.alias


class Group(BaseModel):
    """An ordered collection of hosts. An empty name means ungrouped."""

    name: str = ""
    hosts: list[Host] = []


class ConfigDocument(BaseModel):
    """Parsed SSH config: managed groups plus raw blocks kept verbatim."""

    groups: list[Group] = []
    raw_blocks: list[str] = []

    def hosts(self) -> list[Host]:
        """All hosts across groups, in file order."""
        return [host for group in self.groups for host in group.hosts]

    def group_names(self) -> list[str]:
        return [group.name for group in self.groups]

    def to_text(self) -> str:
        """Serialize back to SSH config text."""
        from hostbook.sshconfig.serializer import serialize_config

        return serialize_config(self.groups, self.raw_blocks)
