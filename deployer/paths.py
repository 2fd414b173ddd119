"""
Path Layout
Locations of the build artifact and the two deployment outputs
"""

from pathlib import Path
from typing import Tuple, Union

RECORD_FILENAME = "deployment.json"
SHARED_DIRNAME = "shared"


def get_artifact_path(tooling_dir: Union[Path, str], contract_name: str) -> Path:
    """
    Get the compiled artifact path for a contract (hardhat layout)

    Args:
        tooling_dir: Deployment tooling directory (the hardhat project)
        contract_name: Contract name, e.g. "Registry"

    Returns:
        <tooling_dir>/artifacts/<Name>.sol/<Name>.json
    """
    tooling_dir = Path(tooling_dir).absolute()
    return tooling_dir / "artifacts" / f"{contract_name}.sol" / f"{contract_name}.json"


def get_output_paths(tooling_dir: Union[Path, str], contract_name: str) -> Tuple[Path, Path]:
    """
    Get deployment output paths

    The record lives one level above the tooling directory; the ABI goes
    into the shared directory beside it.

    Args:
        tooling_dir: Deployment tooling directory
        contract_name: Contract name

    Returns:
        Tuple of (record_path, abi_path)
    """
    root = Path(tooling_dir).absolute().parent

    record_path = root / RECORD_FILENAME
    abi_path = root / SHARED_DIRNAME / f"{contract_name}.abi.json"

    return (record_path, abi_path)
