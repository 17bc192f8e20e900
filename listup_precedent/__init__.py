# -*- coding: utf-8 -*-
"""裁判所ウェブサイトの判例検索から判例の一覧データを作る。"""

__version__ = '0.1.0'
