"""
Pytest configuration and shared fixtures for DICOM Projector tests.
"""

import tempfile
from pathlib import Path
from typing import Generator

import pydicom
import pytest
from pydicom.dataset import Dataset, FileDataset
from pydicom.sequence import Sequence

from dicom_projector.core.nodes import Node


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields:
        Path to temporary directory that will be cleaned up after test
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def patient_nodes() -> list[Node]:
    """Flat dataset with a patient name and ID."""
    return [
        Node.element("00100010", "PN", ["DOE^JOHN"]),
        Node.element("00100020", "LO", ["PAT001"]),
    ]


@pytest.fixture
def nested_nodes() -> list[Node]:
    """Dataset with one two-item sequence, numeric strings and pixel data."""
    return [
        Node.element("00080060", "CS", ["CT"]),
        Node.sequence(
            "00081140",
            [
                Node.item([Node.element("00081150", "UI", ["1.2.3"])]),
                Node.item([Node.element("00081150", "UI", ["1.2.4"])]),
            ],
        ),
        Node.element("00200013", "IS", ["7"]),
        Node.element("00200032", "DS", ["-125.0", "0.5", "12"]),
        Node.pixel_data([(1024, 512), (1536, 512)]),
    ]


def _pixel_dataset(file_meta: pydicom.dataset.FileMetaDataset, file_path: Path) -> FileDataset:
    dataset = FileDataset(
        str(file_path), {}, file_meta=file_meta, preamble=b"\x00" * 128
    )

    dataset.PatientName = "Test^Patient"
    dataset.PatientID = "TEST123"
    dataset.PatientBirthDate = "19800101"
    dataset.StudyInstanceUID = "1.2.826.0.1.3680043.8.498.10"
    dataset.SeriesInstanceUID = "1.2.826.0.1.3680043.8.498.11"
    dataset.SOPInstanceUID = file_meta.MediaStorageSOPInstanceUID
    dataset.SOPClassUID = file_meta.MediaStorageSOPClassUID
    dataset.Modality = "CT"
    dataset.StudyDate = "20240101"
    dataset.InstanceNumber = "4242"
    dataset.ImagePositionPatient = ["-125.5", "10", "3.25"]

    referenced = Dataset()
    referenced.ReferencedSOPClassUID = "1.2.840.10008.5.1.4.1.1.2"
    referenced.ReferencedSOPInstanceUID = "1.2.3.4"
    dataset.ReferencedImageSequence = Sequence([referenced])

    return dataset


@pytest.fixture
def sample_dicom_file(temp_dir: Path) -> Path:
    """Create a small two-frame CT file with a sequence and numeric strings.

    Pixel data: 2 frames of 2x2 16-bit pixels, 8 bytes per frame.
    """
    file_path = temp_dir / "test.dcm"

    file_meta = pydicom.dataset.FileMetaDataset()
    file_meta.MediaStorageSOPClassUID = "1.2.840.10008.5.1.4.1.1.2"  # CT Image Storage
    file_meta.MediaStorageSOPInstanceUID = "1.2.826.0.1.3680043.8.498.12"
    file_meta.TransferSyntaxUID = "1.2.840.10008.1.2.1"  # Explicit VR Little Endian
    file_meta.ImplementationClassUID = "1.2.826.0.1.3680043.8.498.1"

    dataset = _pixel_dataset(file_meta, file_path)
    dataset.Rows = 2
    dataset.Columns = 2
    dataset.SamplesPerPixel = 1
    dataset.BitsAllocated = 16
    dataset.BitsStored = 16
    dataset.HighBit = 15
    dataset.PixelRepresentation = 0
    dataset.PhotometricInterpretation = "MONOCHROME2"
    dataset.NumberOfFrames = "2"
    dataset.PixelData = bytes(range(16))

    dataset.save_as(str(file_path), enforce_file_format=True)
    return file_path


@pytest.fixture
def encapsulated_dicom_file(temp_dir: Path) -> Path:
    """Create a file with encapsulated pixel data: empty offset table, 2 fragments."""
    file_path = temp_dir / "encapsulated.dcm"

    file_meta = pydicom.dataset.FileMetaDataset()
    file_meta.MediaStorageSOPClassUID = "1.2.840.10008.5.1.4.1.1.7"  # Secondary Capture
    file_meta.MediaStorageSOPInstanceUID = "1.2.826.0.1.3680043.8.498.13"
    file_meta.TransferSyntaxUID = "1.2.840.10008.1.2.5"  # RLE Lossless
    file_meta.ImplementationClassUID = "1.2.826.0.1.3680043.8.498.1"

    dataset = _pixel_dataset(file_meta, file_path)
    dataset.Rows = 2
    dataset.Columns = 2
    dataset.SamplesPerPixel = 1
    dataset.BitsAllocated = 8
    dataset.BitsStored = 8
    dataset.HighBit = 7
    dataset.PixelRepresentation = 0
    dataset.PhotometricInterpretation = "MONOCHROME2"
    dataset.NumberOfFrames = "2"

    item = b"\xfe\xff\x00\xe0"
    dataset.PixelData = (
        item + (0).to_bytes(4, "little")
        + item + (6).to_bytes(4, "little") + b"\x01\x02\x03\x04\x05\x06"
        + item + (4).to_bytes(4, "little") + b"\x07\x08\x09\x0a"
    )
    dataset["PixelData"].VR = "OB"
    dataset["PixelData"].is_undefined_length = True

    dataset.save_as(str(file_path), enforce_file_format=True)
    return file_path


@pytest.fixture
def reset_structlog():
    """Reset structlog configuration after each test.

    This ensures tests don't interfere with each other's logging configuration.
    """
    import logging

    import structlog

    yield

    structlog.reset_defaults()
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)


@pytest.fixture
def capture_logs(reset_structlog):
    """Capture log output for testing.

    Returns:
        List that will contain captured log entries
    """
    import logging

    import structlog

    captured = []

    def capture_processor(logger, method_name, event_dict):
        """Capture event dict before rendering."""
        captured.append(event_dict.copy())
        return event_dict

    logging.basicConfig(level=logging.DEBUG)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            capture_processor,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    yield captured

    captured.clear()
