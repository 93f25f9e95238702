# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/09/22 01:04:45
# @Author : Kariko Lin

"""Reads and writes `php.ini` text.

We do NOT evaluate anything php itself would:
no `${ENV}` expansion, no `[PATH=...]`/`[HOST=...]` semantics
(they are just sections here), no included scan dirs.
"""

from io import StringIO, TextIOBase
from warnings import warn

import chardet

from ..abstract import FileHandler
from .document import PHPIniDocument


class PHPIniParser(FileHandler[PHPIniDocument]):
    def __init__(self, inifile: str, encoding: str | None = None):
        super().__init__(inifile)
        self._codec = encoding
        # remembered from the last read, so writing keeps CRLF files CRLF.
        self._newline = '\n'

    @staticmethod
    def readstream(buf: TextIOBase) -> PHPIniDocument:
        """读取解码好的字符串流。

        如没有特殊需求，直接调用`self.read()`便是。
        """
        ret = PHPIniDocument.from_lines(buf)
        for name, cnt in ret.duplicates().items():
            warn(f'php.ini 中 "{name}" 出现了 {cnt} 次，以第一处为准。')
        return ret

    @staticmethod
    def _decode_file(filename: str) -> tuple[str, str]:
        """Guess the codec with chardet. Returns `(text, codec)`."""
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec is None or codec['encoding'] is None \
                or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            return raw.decode(codec['encoding']), codec['encoding']
        except UnicodeDecodeError:
            # latin-1 never fails, and writes back byte-identical.
            return raw.decode('latin-1'), 'latin-1'

    def read(self) -> PHPIniDocument:
        """读取`PHPIniParser`实例指定的文件。

        指定的编码读不了（或者压根没指定）就交给 chardet 猜，
        猜出来的编码会记下来，写回去的时候接着用。
        """
        try:
            # newline='' keeps '\r\n' visible, see `self._newline`.
            with open(self._fn, 'r', encoding=self._codec or 'utf-8',
                      newline='') as fp:
                text = fp.read()
        except UnicodeDecodeError:
            text, self._codec = self._decode_file(self._fn)
        if text.startswith('\ufeff'):
            # Notepad's BOM, written back on save.
            text, self._codec = text[1:], 'utf-8-sig'
        self._newline = '\r\n' if '\r\n' in text else '\n'
        return self.readstream(StringIO(text, newline=''))

    def write(self, instance: PHPIniDocument) -> None:
        with open(self._fn, 'w', encoding=self._codec or 'utf-8',
                  newline='') as fp:
            fp.write(instance.to_text(self._newline))

    def __str__(self) -> str:
        return "php.ini: " + super().__str__() + f"({self._codec})"
