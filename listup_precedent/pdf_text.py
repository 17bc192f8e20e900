# -*- coding: utf-8 -*-
"""判決文PDFのテキスト抽出。pdfminer.six を優先し、失敗したら PyMuPDF を使う。"""
from __future__ import annotations

import io
import logging
from typing import Optional, Tuple

import fitz  # PyMuPDF
from pdfminer.high_level import extract_text as pdfminer_extract_text


class PDFExtractor:
    def extract_with_engine(self, pdf_bytes: bytes) -> Tuple[str, str]:
        try:
            text = pdfminer_extract_text(io.BytesIO(pdf_bytes)) or ''
            if text.strip():
                return text, 'pdfminer'
        except Exception as e:
            logging.warning('pdfminer extract failed: %s', e)
        try:
            with fitz.open(stream=pdf_bytes, filetype='pdf') as doc:
                text = '\n\n'.join(page.get_text() for page in doc)
            if text.strip():
                return text, 'pymupdf'
        except Exception as e:
            logging.warning('pymupdf extract failed: %s', e)
        return '', 'none'

    def extract_text(self, pdf_bytes: bytes) -> Optional[str]:
        """抽出できなければ None (contents は欠落扱い)。"""
        text, engine = self.extract_with_engine(pdf_bytes)
        logging.debug('PDF text extracted with %s (%d chars)', engine, len(text))
        return text.strip() or None
