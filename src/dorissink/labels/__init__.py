from .label_generator import (
    LabelGenerator as LabelGenerator,
    is_valid_label as is_valid_label,
)
