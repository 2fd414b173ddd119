"""
Build Artifacts
Reads the compiled contract and persists the deployment record + ABI
"""

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

from loguru import logger

from .exceptions import ArtifactNotFoundError, ArtifactParseError, PersistenceError
from .records import DeploymentRecord


@dataclass
class BuildArtifact:
    """Compiled contract description (hardhat artifact)"""

    contract_name: str
    abi: List[Dict[str, Any]]
    bytecode: str
    path: Path


def load_build_artifact(path: Union[Path, str]) -> BuildArtifact:
    """
    Load a compiled build artifact

    Args:
        path: Path to <Name>.json produced by the compiler

    Returns:
        BuildArtifact

    Raises:
        ArtifactNotFoundError: If the file does not exist
        ArtifactParseError: If the file is not a usable artifact
    """
    path = Path(path)

    if not path.is_file():
        raise ArtifactNotFoundError(f"Contract artifact not found: {path}")

    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ArtifactParseError(f"Contract artifact {path} is not valid JSON: {e}") from e
    except OSError as e:
        raise ArtifactParseError(f"Contract artifact {path} could not be read: {e}") from e

    if not isinstance(data, dict):
        raise ArtifactParseError(f"Contract artifact {path} is not a JSON object")

    abi = data.get('abi')
    if not isinstance(abi, list):
        raise ArtifactParseError(f"Contract artifact {path} has no 'abi' array")
    if not abi:
        raise ArtifactParseError(f"Contract artifact {path} has an empty ABI")

    bytecode = data.get('bytecode')
    if isinstance(bytecode, dict):
        # solc standard-json shape: {"object": "..."}
        bytecode = bytecode.get('object')
    if not isinstance(bytecode, str) or bytecode in ('', '0x'):
        raise ArtifactParseError(f"Contract artifact {path} has no deployable bytecode")
    if not bytecode.startswith('0x'):
        bytecode = '0x' + bytecode

    contract_name = data.get('contractName') or path.stem

    logger.debug(f"Loaded artifact for {contract_name} ({len(abi)} ABI entries)")

    return BuildArtifact(
        contract_name=contract_name,
        abi=abi,
        bytecode=bytecode,
        path=path,
    )


def _write_json(path: Path, data: Any):
    """Replace path with data as a whole file"""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, 'w') as f:
            json.dump(data, f, indent=2)
            f.write('\n')
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class ArtifactPersister:
    """
    Writes the deployment record and the extracted ABI

    Both files are whole-file overwrites; the previous run's outputs are
    replaced, not appended to.
    """

    def __init__(self, record_path: Union[Path, str], abi_path: Union[Path, str]):
        """
        Initialize Artifact Persister

        Args:
            record_path: Destination of deployment.json
            abi_path: Destination of <Name>.abi.json
        """
        self.record_path = Path(record_path)
        self.abi_path = Path(abi_path)

    def persist(self, record: DeploymentRecord, artifact: BuildArtifact):
        """
        Write the ABI document and the deployment record

        Args:
            record: Confirmed deployment record
            artifact: Build artifact the contract was deployed from

        Raises:
            PersistenceError: If an output directory is missing or a write fails
        """
        # Check both destinations before touching either file
        for path in (self.abi_path, self.record_path):
            if not path.parent.is_dir():
                raise PersistenceError(
                    f"Output directory does not exist: {path.parent}",
                    record=record,
                    path=path,
                )

        # ABI first: a record on disk always has its ABI beside it
        for path, data in ((self.abi_path, artifact.abi), (self.record_path, record.to_dict())):
            try:
                _write_json(path, data)
            except OSError as e:
                raise PersistenceError(
                    f"Failed to write {path}: {e}",
                    record=record,
                    path=path,
                ) from e

        logger.success(f"ABI saved to: {self.abi_path}")
        logger.success(f"Deployment info saved to: {self.record_path}")
