# -*- coding: utf-8 -*-
"""JSONの書き出し先。

- JsonArrayWriter: 1ファイルにJSON配列として追記していく
- PerRecordWriter: 1件1ファイル + JSON Lines のインデックス
"""
from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import IO, Optional

from .models import PrecedentInfo


def ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def record_key(info: PrecedentInfo) -> str:
    """`{lawsuit_id}_{hash8}`。hash は事件番号・裁判所名・種別・日付・IDから作る。"""
    src = '|'.join([
        info.case_number,
        info.court_name,
        info.trial_type.value,
        str(info.date),
        info.lawsuit_id,
    ])
    sha = hashlib.sha256(src.encode('utf-8')).hexdigest()
    return f"{info.lawsuit_id}_{sha[:8]}"


class JsonArrayWriter:
    """`[` を書いて開き、1件ずつ `,\\n` 区切りで追記し、閉じるときに `]` を書く。

    例外で抜けた場合も `]` は書くので、それまでに書いた分は正しいJSONとして残る。
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.count = 0
        self._fp: Optional[IO[str]] = None

    def __enter__(self) -> "JsonArrayWriter":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        ensure_dir(self.path.parent)
        self._fp = open(self.path, 'w', encoding='utf-8')
        self._fp.write('[')
        logging.info('START writing file: %s', self.path)

    def write(self, info: PrecedentInfo) -> None:
        if self._fp is None:
            raise RuntimeError('writer is not open')
        self._fp.write('\n' if self.count == 0 else ',\n')
        self._fp.write(json.dumps(info.to_dict(), ensure_ascii=False))
        self._fp.flush()
        self.count += 1

    def close(self) -> None:
        if self._fp is None:
            return
        self._fp.write('\n]')
        self._fp.close()
        self._fp = None
        logging.info('END writing file: %s (%d records)', self.path, self.count)


class PerRecordWriter:
    def __init__(self, output_dir: Path, index_path: Path):
        self.output_dir = Path(output_dir)
        self.index_path = Path(index_path)
        self.count = 0
        self._index: Optional[IO[str]] = None

    def __enter__(self) -> "PerRecordWriter":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        ensure_dir(self.output_dir)
        ensure_dir(self.index_path.parent)
        self._index = open(self.index_path, 'a', encoding='utf-8')
        logging.info('START writing records to %s (index: %s)', self.output_dir, self.index_path)

    def path_for(self, info: PrecedentInfo) -> Path:
        return self.output_dir / f"{record_key(info)}.json"

    def write(self, info: PrecedentInfo) -> Path:
        if self._index is None:
            raise RuntimeError('writer is not open')
        path = self.path_for(info)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(info.to_dict(), f, ensure_ascii=False, indent=2)
        self._index.write(json.dumps(info.summary(), ensure_ascii=False) + '\n')
        self._index.flush()
        self.count += 1
        return path

    def close(self) -> None:
        if self._index is None:
            return
        self._index.close()
        self._index = None
        logging.info('END writing records: %d', self.count)
