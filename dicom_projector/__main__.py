"""Allow ``python -m dicom_projector``."""

import sys

from dicom_projector.cli.main import main

sys.exit(main())
