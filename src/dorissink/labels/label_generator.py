"""
Label Generation Module.

Stream load transactions are identified by a caller assigned label, which the
database uses to deduplicate retried loads. The label layout depends on
`label_prefix` and on whether the sink takes part in two-phase commit:

- With 2PC, labels are deterministic (`prefix_subtask_checkpoint`), so a
  restarted job can find and commit or abort the transactions it pre-committed.
- Without 2PC, a random suffix is appended so every load gets a fresh label.
"""

import re
import uuid
import zlib
from typing import Optional
import logging as log

from ..errors import IllegalStateError, InvalidArgumentError
from ..options import ExecutionOptions

# Labels accepted by the database
LABEL_PATTERN = re.compile(r"^[-_A-Za-z0-9:]{1,128}$")


def is_valid_label(label: str) -> bool:
    """Returns True if `label` may be used as a stream load label."""
    return LABEL_PATTERN.match(label) is not None


class LabelGenerator:
    """
    Generates stream load labels for one sink subtask.

    Attributes:
        label_prefix (str): Prefix of every label (may be empty).
        enable_2pc (bool): Whether labels must be reproducible across restarts.
        table_identifier (Optional[str]): Target table (e.g. "db.tbl"), required
                                          by `generate_table_label()`.
        subtask_id (int): Index of the parallel sink subtask.
    """

    def __init__(
        self,
        label_prefix: str,
        enable_2pc: bool,
        table_identifier: Optional[str] = None,
        subtask_id: int = 0,
    ):
        self.label_prefix = label_prefix
        self.enable_2pc = enable_2pc
        self.table_identifier = table_identifier
        self.subtask_id = subtask_id

    @classmethod
    def from_options(
        cls,
        options: ExecutionOptions,
        subtask_id: int = 0,
        table_identifier: Optional[str] = None,
    ) -> "LabelGenerator":
        return cls(
            label_prefix=options.label_prefix,
            enable_2pc=options.enable_2pc,
            table_identifier=table_identifier,
            subtask_id=subtask_id,
        )

    def _with_random_suffix(self, label: str) -> str:
        return label if self.enable_2pc else f"{label}_{uuid.uuid4()}"

    @staticmethod
    def _checked(label: str) -> str:
        """Raises `InvalidArgumentError` unless `label` is a legal label."""
        if not is_valid_label(label):
            raise InvalidArgumentError(
                f"Generated label '{label}' ({len(label)} chars) is not a valid load "
                f"label (pattern {LABEL_PATTERN.pattern}). Use a shorter label prefix "
                "made of letters, digits, '-', '_' or ':'."
            )
        return label

    def generate_label(self, checkpoint_id: int) -> str:
        """
        Label of the load covering `checkpoint_id` for this subtask.

        Raises:
            InvalidArgumentError: If the label prefix makes the label illegal.
        """
        return self._checked(
            self._with_random_suffix(
                f"{self.label_prefix}_{self.subtask_id}_{checkpoint_id}"
            )
        )

    def generate_table_label(self, checkpoint_id: int) -> str:
        """
        Label of the load covering `checkpoint_id` for this subtask and table.

        If the table identifier produces an illegal label (characters outside
        the label alphabet, or too long), it is replaced by a CRC32 digest of
        the identifier, which stays stable across restarts.

        Raises:
            IllegalStateError: If the generator has no table identifier.
            InvalidArgumentError: If the label is still illegal with the digest
                                  (e.g. the label prefix is too long).
        """
        if self.table_identifier is None:
            raise IllegalStateError(
                "generate_table_label() requires a table identifier."
            )

        label = self._with_random_suffix(
            f"{self.label_prefix}_{self.table_identifier}_{self.subtask_id}_{checkpoint_id}"
        )
        if is_valid_label(label):
            return label

        digest = zlib.crc32(self.table_identifier.encode("utf-8"))
        log.debug(
            f"Label '{label}' is illegal, using digest {digest} "
            f"for table '{self.table_identifier}'"
        )
        return self._checked(
            self._with_random_suffix(
                f"{self.label_prefix}_{digest}_{self.subtask_id}_{checkpoint_id}"
            )
        )

    def generate_batch_label(self, table: Optional[str] = None) -> str:
        """
        Label of a batch mode flush. Batch flushes are not tied to checkpoints,
        so the label always ends with a random uuid.

        Raises:
            InvalidArgumentError: If the prefix or table makes the label illegal.
        """
        table = table if table is not None else self.table_identifier
        if table:
            return self._checked(f"{self.label_prefix}_{table}_{uuid.uuid4()}")
        return self._checked(f"{self.label_prefix}_{uuid.uuid4()}")
