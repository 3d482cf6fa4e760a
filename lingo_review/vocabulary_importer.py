import pandas as pd
from typing import List, Optional, Dict, Any
from pathlib import Path
from lingo_review.schemas import VocabularyItemCreate
from lingo_review.logging_config import get_logger

logger = get_logger(__name__)

REQUIRED_COLUMNS = ["id", "word", "translation"]
OPTIONAL_COLUMNS = ["pronunciation", "example_sentence", "example_translation", "image_url"]
DIFFICULTIES = {"beginner", "intermediate", "advanced"}

class VocabularyImporter:
    """
    Parse vocabulary sheets into catalog items.
    Expected columns: id, word, translation, plus optional pronunciation,
    example_sentence, example_translation, image_url, difficulty,
    scenario_id and language.
    """

    @staticmethod
    def parse_frame(
        df: pd.DataFrame,
        scenario_id: Optional[str] = None,
        language: Optional[str] = None
    ) -> List[VocabularyItemCreate]:
        """Convert a vocabulary table into validated items, skipping unusable rows"""
        # Normalize column names
        df.columns = df.columns.str.strip().str.lower().str.replace(" ", "_")

        items = []
        for index, row in df.iterrows():
            item = VocabularyImporter._row_to_item(row, scenario_id, language)
            if item is None:
                logger.warning("vocabulary_row_skipped", row=int(index) + 2)
                continue
            items.append(item)

        return items

    @staticmethod
    def _row_to_item(row: pd.Series, scenario_id: Optional[str], language: Optional[str]) -> Optional[VocabularyItemCreate]:
        values: Dict[str, Any] = {}
        for column in REQUIRED_COLUMNS:
            value = VocabularyImporter._cell(row, column)
            if not value:
                return None
            values[column] = value

        for column in OPTIONAL_COLUMNS:
            values[column] = VocabularyImporter._cell(row, column)
        values["image_url"] = values["image_url"] or None

        difficulty = VocabularyImporter._cell(row, "difficulty").lower() or "beginner"
        if difficulty not in DIFFICULTIES:
            return None
        values["difficulty"] = difficulty

        values["scenario_id"] = VocabularyImporter._cell(row, "scenario_id") or scenario_id
        values["language"] = (VocabularyImporter._cell(row, "language") or language or "").lower()
        if not values["scenario_id"] or not values["language"]:
            return None

        return VocabularyItemCreate(**values)

    @staticmethod
    def _cell(row: pd.Series, column: str) -> str:
        """Cell text, with missing columns and NaN read as empty"""
        value = row.get(column, "")
        if pd.isna(value):
            return ""
        value = str(value).strip()
        return "" if value.lower() == "nan" else value

    @staticmethod
    def auto_parse(
        file_path: str,
        scenario_id: Optional[str] = None,
        language: Optional[str] = None
    ) -> List[VocabularyItemCreate]:
        """
        Automatically detect file type and parse accordingly.
        Supports: CSV, Excel (xlsx, xls)
        """
        file_ext = Path(file_path).suffix.lower()

        if file_ext == ".csv":
            df = pd.read_csv(file_path, dtype=str)
        elif file_ext in [".xlsx", ".xls"]:
            df = pd.read_excel(file_path, dtype=str)
        else:
            raise ValueError(f"Unsupported file format: {file_ext}. Use .csv or .xlsx")

        return VocabularyImporter.parse_frame(df, scenario_id, language)
