"""Keyword-matched context and prompts for a language-model Q&A backend.

Only the text handed to a model is built here; sending it is left to the
caller.
"""
import re
from dataclasses import dataclass
from typing import Optional

from catechism_tutor.catalog import check_language
from catechism_tutor.config import CONTEXT_LIMIT, FALLBACK_CONTEXT_SIZE
from catechism_tutor.models import ContentItem

CONTEXT_HEADERS = {
    "en": "Here are relevant questions and answers from the Westminster Shorter Catechism:\n\n",
    "zh": "以下是威斯敏斯特小要理问答中的相关问题和答案：\n\n",
}

PROMPT_TEMPLATES = {
    "en": (
        "You are a helpful AI assistant specializing in the Westminster Shorter Catechism. "
        "Use the provided context to answer questions accurately and helpfully. If the question "
        "cannot be answered from the context, say so politely and suggest looking at the "
        "catechism questions.\n\n"
        "Context:\n{context}\n"
        "User Question: {query}\n\n"
        "Please provide a clear, accurate answer based on the catechism. "
        "Keep your response concise but informative."
    ),
    "zh": (
        "你是一个专门研究威斯敏斯特小要理问答的有帮助的AI助手。使用提供的上下文准确而有帮助地回答问题。"
        "如果问题无法从上下文中回答，请礼貌地说出来并建议查看要理问答的问题。\n\n"
        "上下文：\n{context}\n"
        "用户问题：{query}\n\n"
        "请基于要理问答提供清晰、准确的答案。保持回答简洁但信息丰富。"
    ),
}

QUESTION_REFERENCE = re.compile(r"question\s*#?\s*(\d+)|q\s*(\d+)|#(\d+)", re.IGNORECASE)


@dataclass(frozen=True)
class ReplyPart:
    text: str = ""
    question_id: Optional[int] = None

    @property
    def is_question(self) -> bool:
        return self.question_id is not None


def _item_mentions(item: ContentItem, needle: str) -> bool:
    if needle in item.question.lower() or needle in item.answer.lower():
        return True
    return any(
        needle in ref.title.lower() or needle in ref.text.lower()
        for group in item.footnotes
        for ref in group
    )


def find_relevant_items(query: str, items: list, limit: int = CONTEXT_LIMIT) -> list:
    """Items whose text or proof texts contain ``query``, in catalog order.

    Falls back to the opening items as general context when nothing matches.
    """
    needle = query.strip().lower()
    if not needle:
        raise ValueError("Query is required")
    relevant = []
    for item in items:
        if _item_mentions(item, needle):
            relevant.append(item)
            if len(relevant) >= limit:
                break
    if not relevant:
        return list(items[:FALLBACK_CONTEXT_SIZE])
    return relevant


def build_context(items: list, language: str) -> str:
    context = CONTEXT_HEADERS[check_language(language)]
    for number, item in enumerate(items, 1):
        context += f"{number}. Question: {item.question}\n"
        context += f"   Answer: {item.answer}\n\n"
    return context


def build_prompt(query: str, items: list, language: str) -> str:
    """Full prompt for ``query`` with context drawn from ``items``."""
    relevant = find_relevant_items(query, items)
    context = build_context(relevant, language)
    return PROMPT_TEMPLATES[language].format(context=context, query=query.strip())


def parse_question_references(reply: str, catalog_size: int) -> list[ReplyPart]:
    """Split a model reply into text and catechism question references.

    Recognises ``Question 1``, ``question #1``, ``Q1`` and ``#1``; numbers
    outside ``1..catalog_size`` are kept as plain text.
    """
    parts = []
    last = 0
    for match in QUESTION_REFERENCE.finditer(reply):
        if match.start() > last:
            parts.append(ReplyPart(text=reply[last:match.start()]))
        number = int(next(group for group in match.groups() if group is not None))
        if 1 <= number <= catalog_size:
            parts.append(ReplyPart(question_id=number))
        else:
            parts.append(ReplyPart(text=match.group(0)))
        last = match.end()
    if last < len(reply):
        parts.append(ReplyPart(text=reply[last:]))
    if not parts:
        return [ReplyPart(text=reply)]
    return parts
