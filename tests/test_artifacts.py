"""
Unit Tests for build artifact loading and output persistence
"""

import json
import os
from pathlib import Path

import pytest

from deployer.artifacts import ArtifactPersister, BuildArtifact, load_build_artifact
from deployer.exceptions import ArtifactNotFoundError, ArtifactParseError, PersistenceError
from deployer.records import DeploymentRecord

from conftest import TEST_ABI, TEST_ADDRESS, TEST_BYTECODE


@pytest.fixture
def record():
    return DeploymentRecord(
        network="localhost",
        contract_address="0x5FbDB2315678afecb367f032d93F642f64180aa3",
        deployer=TEST_ADDRESS,
        timestamp_utc="2024-05-01T12:00:00.000Z",
        chain_id="31337",
        block_number=1,
    )


def write_artifact(path: Path, data):
    with open(path, 'w') as f:
        f.write(data if isinstance(data, str) else json.dumps(data))
    return path


class TestLoadBuildArtifact:

    def test_loads_hardhat_artifact(self, artifact_file: Path):
        artifact = load_build_artifact(artifact_file)

        assert artifact.contract_name == "Registry"
        assert artifact.abi == TEST_ABI
        assert artifact.bytecode == TEST_BYTECODE
        assert artifact.path == artifact_file

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ArtifactNotFoundError):
            load_build_artifact(tmp_path / "Missing.json")

    def test_missing_file_is_file_not_found(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_build_artifact(tmp_path / "Missing.json")

    @pytest.mark.parametrize("content", [
        "{ invalid json",
        ["not", "an", "object"],
        {"bytecode": TEST_BYTECODE},
        {"abi": {"type": "function"}, "bytecode": TEST_BYTECODE},
        {"abi": [], "bytecode": TEST_BYTECODE},
        {"abi": TEST_ABI},
        {"abi": TEST_ABI, "bytecode": "0x"},
    ])
    def test_unusable_artifact(self, tmp_path: Path, content):
        path = write_artifact(tmp_path / "Bad.json", content)

        with pytest.raises(ArtifactParseError):
            load_build_artifact(path)

    def test_standard_json_bytecode_object(self, tmp_path: Path):
        path = write_artifact(tmp_path / "Token.json", {
            "abi": TEST_ABI,
            "bytecode": {"object": TEST_BYTECODE[2:]},
        })

        artifact = load_build_artifact(path)

        assert artifact.bytecode == TEST_BYTECODE
        assert artifact.contract_name == "Token"


class TestArtifactPersister:

    def _artifact(self, abi=TEST_ABI):
        return BuildArtifact(contract_name="Registry", abi=abi, bytecode=TEST_BYTECODE, path=Path("x"))

    def test_writes_record_and_abi(self, project_dir: Path, record):
        record_path = project_dir / "deployment.json"
        abi_path = project_dir / "shared" / "Registry.abi.json"

        ArtifactPersister(record_path, abi_path).persist(record, self._artifact())

        with open(abi_path) as f:
            assert json.load(f) == [{"type": "function", "name": "foo"}]

        with open(record_path) as f:
            data = json.load(f)
        assert data == {
            "network": "localhost",
            "contractAddress": "0x5FbDB2315678afecb367f032d93F642f64180aa3",
            "deployer": TEST_ADDRESS,
            "timestampUtc": "2024-05-01T12:00:00.000Z",
            "chainId": "31337",
            "blockNumber": 1,
        }

    def test_abi_copied_verbatim(self, project_dir: Path, record):
        abi = [
            {"type": "event", "name": "Registered", "inputs": [{"name": "id", "type": "uint256", "indexed": True}]},
            {"type": "function", "name": "register", "stateMutability": "nonpayable", "inputs": [], "outputs": []},
        ]
        abi_path = project_dir / "shared" / "Registry.abi.json"

        ArtifactPersister(project_dir / "deployment.json", abi_path).persist(record, self._artifact(abi))

        with open(abi_path) as f:
            assert json.load(f) == abi

    def test_overwrites_previous_outputs(self, project_dir: Path, record):
        record_path = project_dir / "deployment.json"
        abi_path = project_dir / "shared" / "Registry.abi.json"
        record_path.write_text('{"old": "record", "padding": "' + "x" * 500 + '"}')
        abi_path.write_text('[{"old": "abi"}]')

        ArtifactPersister(record_path, abi_path).persist(record, self._artifact())

        with open(record_path) as f:
            assert "old" not in json.load(f)
        with open(abi_path) as f:
            assert json.load(f) == TEST_ABI

    def test_leaves_no_temp_files(self, project_dir: Path, record):
        ArtifactPersister(
            project_dir / "deployment.json",
            project_dir / "shared" / "Registry.abi.json",
        ).persist(record, self._artifact())

        leftovers = [p for p in project_dir.rglob("*.tmp")]
        assert leftovers == []

    def test_missing_directory_writes_nothing(self, tmp_path: Path, record):
        record_path = tmp_path / "deployment.json"
        abi_path = tmp_path / "shared" / "Registry.abi.json"  # shared/ not created

        with pytest.raises(PersistenceError) as exc_info:
            ArtifactPersister(record_path, abi_path).persist(record, self._artifact())

        assert exc_info.value.record is record
        assert exc_info.value.path == abi_path
        assert not record_path.exists()
        assert not (tmp_path / "shared").exists()

    @pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
    def test_write_failure_carries_record(self, project_dir: Path, record):
        shared = project_dir / "shared"
        shared.chmod(0o500)
        try:
            with pytest.raises(PersistenceError) as exc_info:
                ArtifactPersister(project_dir / "deployment.json", shared / "Registry.abi.json").persist(
                    record, self._artifact()
                )
        finally:
            shared.chmod(0o700)

        assert exc_info.value.record.contract_address == record.contract_address
