"""
Notion 블록 생성 유틸리티

블록 텍스트는 Notion 제한(2000자)을 넘지 않도록 잘라서 사용합니다.
"""
from typing import Any, Dict, List, Optional, Sequence, Union

from cube_report.domain.report.constants import NOTION_BLOCK_MAX_LENGTH, NOTION_MAX_BLOCKS_PER_REQUEST


Block = Dict[str, Any]

# 문자열 또는 {"text": ..., "link": ...}
TableCell = Union[str, Dict[str, Optional[str]]]


def split_text_into_chunks(text: str, chunk_size: int = NOTION_BLOCK_MAX_LENGTH) -> List[str]:
    """텍스트를 chunk_size 길이로 나누기 (빈 문자열은 빈 목록)"""
    return [text[i:i + chunk_size] for i in range(0, len(text), chunk_size)]


def chunk_blocks(blocks: Sequence[Block], size: int = NOTION_MAX_BLOCKS_PER_REQUEST) -> List[List[Block]]:
    """블록 목록을 요청당 최대 개수로 나누기"""
    return [list(blocks[i:i + size]) for i in range(0, len(blocks), size)]


def rich_text(content: str, link: Optional[str] = None, color: Optional[str] = None) -> List[Dict[str, Any]]:
    text: Dict[str, Any] = {"content": content[:NOTION_BLOCK_MAX_LENGTH]}
    if link:
        text["link"] = {"url": link}

    segment: Dict[str, Any] = {"type": "text", "text": text}
    if color:
        segment["annotations"] = {
            "bold": False,
            "italic": False,
            "strikethrough": False,
            "underline": False,
            "code": False,
            "color": color,
        }
    return [segment]


def _text_block(block_type: str, text: str, color: Optional[str] = None) -> Block:
    return {
        "object": "block",
        "type": block_type,
        block_type: {"rich_text": rich_text(text, color=color)},
    }


def heading_1(text: str, color: Optional[str] = None) -> Block:
    return _text_block("heading_1", text, color)


def heading_2(text: str, color: Optional[str] = None) -> Block:
    return _text_block("heading_2", text, color)


def heading_3(text: str) -> Block:
    return _text_block("heading_3", text)


def paragraph(text: str) -> Block:
    return _text_block("paragraph", text)


def paragraphs(text: str) -> List[Block]:
    """긴 텍스트는 여러 단락으로 나누기"""
    return [paragraph(chunk) for chunk in split_text_into_chunks(text)]


def bulleted_list_item(text: str) -> Block:
    return _text_block("bulleted_list_item", text)


def divider() -> Block:
    return {"object": "block", "type": "divider", "divider": {}}


def code_blocks(text: str, language: str = "plain text") -> List[Block]:
    """코드 블록 (2000자 단위로 분리)"""
    return [
        {
            "object": "block",
            "type": "code",
            "code": {"rich_text": rich_text(chunk), "language": language},
        }
        for chunk in split_text_into_chunks(text)
    ]


def table_row(cells: Sequence[TableCell]) -> Block:
    """하이퍼링크를 지원하는 테이블 행"""
    rendered = []
    for cell in cells:
        if isinstance(cell, str):
            rendered.append(rich_text(cell))
        else:
            rendered.append(rich_text(cell.get("text") or "", link=cell.get("link")))
    return {"object": "block", "type": "table_row", "table_row": {"cells": rendered}}


def table(rows: Sequence[Sequence[TableCell]], has_column_header: bool = True) -> Block:
    """
    테이블 블록

    Raises:
        ValueError: 행이 없는 경우
    """
    if not rows:
        raise ValueError("테이블 데이터가 비어있습니다")

    return {
        "object": "block",
        "type": "table",
        "table": {
            "table_width": len(rows[0]) or 1,
            "has_column_header": has_column_header,
            "has_row_header": False,
            "children": [table_row(row) for row in rows],
        },
    }


def block_text(block: Block) -> str:
    """블록의 평문 텍스트 (테스트/로그용)"""
    body = block.get(block["type"], {})
    return "".join(segment["text"]["content"] for segment in body.get("rich_text", []))
