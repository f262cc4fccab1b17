from .action_10_package_manager import EnsurePackageManagerAction
from .action_20_diff_tool import EnsureDiffToolAction
from .action_30_version_control import ConfigureVersionControlAction
from .action_40_container_runtime import EnsureContainerRuntimeAction
from .action_50_repo_cli import EnsureRepoCliAction
from .action_60_aliases import InstallAliasesAction
from .action_70_interactive_shell import EnsureInteractiveShellAction
from .action_80_patched_fonts import EnsurePatchedFontsAction
from .action_90_local_configurations import CopyLocalConfigurationsAction

__all__ = [
    "EnsurePackageManagerAction",
    "EnsureDiffToolAction",
    "ConfigureVersionControlAction",
    "EnsureContainerRuntimeAction",
    "EnsureRepoCliAction",
    "InstallAliasesAction",
    "EnsureInteractiveShellAction",
    "EnsurePatchedFontsAction",
    "CopyLocalConfigurationsAction",
]
