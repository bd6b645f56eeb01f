"""Renderização em Markdown do resumo do dia.

Função pura `render_day_summary(notes, date) -> str`: recebe as notas do dia
(dicts vindos de `note_repo`) e monta quatro blocos separados por `---`:

1. painel de métricas (tabela, barra de progresso e frase motivacional);
2. linha do tempo por período (Madrugada, Manhã, Tarde, Noite);
3. atividades pendentes agrupadas por prioridade;
4. insights e próximos passos.

Status e prioridade são classificados por substring, sem diferenciar
maiúsculas de minúsculas.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from app.core.time import time_to_minutes

Note = Dict[str, Any]

STATUS_DONE = "concluído"
STATUS_IN_PROGRESS = "em andamento"
STATUS_NOT_DONE = "não realizado"

PRIORITY_URGENT = "urgente"
PRIORITY_HIGH = "alta"
PRIORITY_MEDIUM = "média"
PRIORITY_LOW = "baixa"

PROGRESS_BAR_WIDTH = 20
DEFAULT_SLOT = "Noite"


@dataclass(frozen=True)
class TimeSlot:
    label: str
    emoji: str
    start: int
    end: int


TIME_SLOTS = (
    TimeSlot("Madrugada", "🌙", 0, 6),
    TimeSlot("Manhã", "🌅", 6, 12),
    TimeSlot("Tarde", "☀️", 12, 18),
    TimeSlot("Noite", "🌆", 18, 24),
)


@dataclass(frozen=True)
class DayMetrics:
    total: int
    completed: int
    in_progress: int
    not_started: int
    urgent: int
    high: int
    completion_rate: int
    with_collaborators: int
    total_hours: int
    total_minutes: int


# --- classificação ---

def _has(value: Optional[str], needle: str) -> bool:
    return bool(value) and needle in value.lower()


def is_done(note: Note) -> bool:
    return _has(note.get("status"), STATUS_DONE)


def is_in_progress(note: Note) -> bool:
    return _has(note.get("status"), STATUS_IN_PROGRESS)


def is_not_done(note: Note) -> bool:
    return _has(note.get("status"), STATUS_NOT_DONE)


def _priority_is(note: Note, level: str) -> bool:
    return _has(note.get("priority"), level)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _plural(n: int, one: str, many: str) -> str:
    return one if n == 1 else many


def status_emoji(status: Optional[str]) -> str:
    if not status:
        return "📝"
    s = status.lower()
    if STATUS_DONE in s:
        return "✅"
    if STATUS_IN_PROGRESS in s:
        return "⏳"
    if STATUS_NOT_DONE in s:
        return "❌"
    return "📝"


def priority_emoji(priority: Optional[str]) -> str:
    if not priority:
        return "📌"
    p = priority.lower()
    if PRIORITY_URGENT in p:
        return "🚨"
    if PRIORITY_HIGH in p:
        return "🔴"
    if PRIORITY_MEDIUM in p:
        return "🟡"
    if PRIORITY_LOW in p:
        return "🟢"
    return "📌"


# --- métricas ---

def _duration_minutes(note: Note) -> int:
    start = time_to_minutes(note.get("start_time"))
    end = time_to_minutes(note.get("end_time"))
    if start is None or end is None:
        return 0
    if end < start:
        # atividade que atravessa a meia-noite
        end += 24 * 60
    return end - start


def calculate_metrics(notes: List[Note]) -> DayMetrics:
    total = len(notes)
    completed = sum(1 for n in notes if is_done(n))
    minutes = sum(_duration_minutes(n) for n in notes)
    return DayMetrics(
        total=total,
        completed=completed,
        in_progress=sum(1 for n in notes if is_in_progress(n)),
        not_started=sum(1 for n in notes if is_not_done(n)),
        urgent=sum(1 for n in notes if _priority_is(n, PRIORITY_URGENT)),
        high=sum(1 for n in notes if _priority_is(n, PRIORITY_HIGH)),
        completion_rate=_round_half_up(completed / total * 100) if total else 0,
        with_collaborators=sum(1 for n in notes if n.get("collaborators")),
        total_hours=minutes // 60,
        total_minutes=minutes % 60,
    )


# --- períodos ---

def time_slot_for(note: Note) -> str:
    start = note.get("start_time")
    if not start:
        return DEFAULT_SLOT
    try:
        hour = int(start.split(":")[0])
    except ValueError:
        return DEFAULT_SLOT
    for slot in TIME_SLOTS:
        if slot.start <= hour < slot.end:
            return slot.label
    return DEFAULT_SLOT


def group_by_period(notes: List[Note]) -> Dict[str, List[Note]]:
    grouped: Dict[str, List[Note]] = {}
    for note in notes:
        grouped.setdefault(time_slot_for(note), []).append(note)
    for label in grouped:
        grouped[label].sort(key=lambda n: n.get("start_time") or "00:00:00")
    return grouped


# --- blocos ---

def progress_bar(percentage: int) -> str:
    filled = max(0, min(PROGRESS_BAR_WIDTH, _round_half_up(percentage / 5)))
    bar = "█" * filled + "░" * (PROGRESS_BAR_WIDTH - filled)
    return f"`{bar}` **{percentage}%**\n"


def _productivity(rate: int) -> tuple[str, str]:
    if rate >= 80:
        return "🔥", "> 🎉 **Excelente desempenho!** Você está arrasando hoje!\n\n"
    if rate >= 60:
        return "💪", "> 💪 **Bom trabalho!** Continue mantendo o ritmo.\n\n"
    if rate >= 40:
        return "⚡", "> ⚡ **Progresso consistente.** Foco nas prioridades!\n\n"
    return "📊", "> 📊 **Dia em desenvolvimento.** Cada passo conta!\n\n"


def render_dashboard(m: DayMetrics) -> str:
    out = "## 📊 Visão Geral\n\n"
    out += "| Métrica | Valor |\n"
    out += "|---------|-------|\n"
    out += f"| 📝 **Total de Atividades** | {m.total} |\n"
    out += f"| ✅ **Concluídas** | {m.completed} ({m.completion_rate}%) |\n"
    out += f"| ⏳ **Em Andamento** | {m.in_progress} |\n"
    out += f"| ❌ **Não Realizadas** | {m.not_started} |\n"
    out += f"| 🔴 **Alta Prioridade** | {m.high + m.urgent} |\n"
    out += f"| 👥 **Com Colaboradores** | {m.with_collaborators} |\n"
    out += f"| ⏱️ **Tempo Total** | {m.total_hours}h {m.total_minutes}min |\n\n"

    emoji, quote = _productivity(m.completion_rate)
    out += f"### {emoji} Indicador de Produtividade\n\n"
    out += progress_bar(m.completion_rate)
    out += "\n"
    out += quote
    return out


def _hhmm(value: Optional[str]) -> str:
    return value[:5] if value else "—"


def _people_block(note: Note) -> str:
    collaborators = note.get("collaborators") or []
    if not collaborators:
        return ""
    return f"👥 **Colaboradores:** {', '.join(collaborators)}\n\n"


def render_note_item(note: Note) -> str:
    priority = note.get("priority")
    item = f"**{status_emoji(note.get('status'))} {note.get('activity')}**\n"
    item += (
        f"⏰ {_hhmm(note.get('start_time'))} → {_hhmm(note.get('end_time'))}"
        f" · {priority_emoji(priority)} {priority or 'Sem prioridade'}"
        f" · 📍 {note.get('activity_type') or 'Não especificado'}\n\n"
    )
    if note.get("description"):
        item += f"📝 {note['description']}\n\n"
    item += _people_block(note)
    comments = note.get("comments") or []
    if comments:
        first = comments[0]
        item += f"💬 **Observação:** \"{first.get('text')}\" — *{first.get('author')}*\n\n"
    return item


def render_pending_item(note: Note) -> str:
    if note.get("start_time"):
        time_range = f"{_hhmm(note.get('start_time'))} → {_hhmm(note.get('end_time'))}"
    else:
        time_range = "Sem horário definido"
    item = f"### {status_emoji(note.get('status'))} {note.get('activity')}\n"
    item += f"**⏰ {time_range}** · 📍 {note.get('activity_type') or 'Não especificado'}\n\n"
    if note.get("description"):
        item += f"📝 {note['description']}\n\n"
    item += _people_block(note)
    return item


def _is_other_status(note: Note) -> bool:
    return not (is_done(note) or is_in_progress(note) or is_not_done(note))


_STATUS_GROUPS = (
    ("✅ Concluídas", is_done),
    ("⏳ Em Andamento", is_in_progress),
    ("❌ Não Realizadas", is_not_done),
    ("📝 Outras", _is_other_status),
)


def render_period(slot: TimeSlot, notes: List[Note]) -> str:
    out = f"## {slot.emoji} {slot.label}\n"
    out += f"*{len(notes)} {_plural(len(notes), 'atividade', 'atividades')}*\n\n"
    for title, matches in _STATUS_GROUPS:
        group = [n for n in notes if matches(n)]
        if group:
            out += f"### {title} ({len(group)})\n\n"
            out += "".join(render_note_item(n) for n in group)
            out += "\n"
    return out


def _is_low_or_unset(note: Note) -> bool:
    return not note.get("priority") or _priority_is(note, PRIORITY_LOW)


_PRIORITY_GROUPS = (
    ("🚨 Prioridade Urgente", lambda n: _priority_is(n, PRIORITY_URGENT)),
    ("🔴 Prioridade Alta", lambda n: _priority_is(n, PRIORITY_HIGH)),
    ("🟡 Prioridade Média", lambda n: _priority_is(n, PRIORITY_MEDIUM)),
    ("🟢 Prioridade Baixa / Sem Prioridade", _is_low_or_unset),
)


def render_pending(notes: List[Note]) -> str:
    pending = [n for n in notes if not is_done(n)]
    if not pending:
        return "# ✅ Atividades Pendentes\n\n> 🎉 **Parabéns!** Todas as atividades foram concluídas hoje!\n"

    out = "# ⚠️ Atividades Pendentes\n\n"
    out += f"*{len(pending)} {_plural(len(pending), 'atividade não concluída', 'atividades não concluídas')}*\n\n"
    for title, matches in _PRIORITY_GROUPS:
        group = [n for n in pending if matches(n)]
        if group:
            out += f"## {title}\n\n"
            out += "".join(render_pending_item(n) for n in group)
            out += "\n"
    return out


def render_insights(notes: List[Note], m: DayMetrics) -> str:
    out = "# 💡 Insights e Recomendações\n\n"

    critical = [
        n for n in notes
        if (_priority_is(n, PRIORITY_URGENT) or _priority_is(n, PRIORITY_HIGH)) and not is_done(n)
    ]
    if critical:
        out += "## 🚨 Atenção Necessária\n\n"
        for n in critical:
            out += (
                f"- {status_emoji(n.get('status'))} {priority_emoji(n.get('priority'))}"
                f" **{n.get('activity')}**: {n.get('description') or 'Requer atenção imediata'}\n"
            )
        out += "\n"

    if m.with_collaborators > 0:
        out += "## 👥 Trabalho em Equipe\n\n"
        out += (
            f"{m.with_collaborators} "
            f"{_plural(m.with_collaborators, 'atividade envolveu', 'atividades envolveram')} colaboração. "
        )
        out += "O trabalho em equipe potencializa resultados!\n\n"

    out += "## 🎯 Próximos Passos\n\n"
    if m.not_started > 0:
        out += (
            f"- 📌 **{m.not_started} {_plural(m.not_started, 'tarefa pendente', 'tarefas pendentes')}**"
            " — Priorize as de alta importância\n"
        )
    if m.in_progress > 0:
        out += (
            f"- ⏳ **{m.in_progress} {_plural(m.in_progress, 'atividade', 'atividades')} em andamento**"
            " — Mantenha o foco para concluir\n"
        )
    if m.completion_rate < 50:
        out += "- 💪 **Dica:** Divida tarefas grandes em etapas menores para aumentar a produtividade\n"

    out += "\n---\n\n"
    out += "*Resumo gerado automaticamente · Continue com o ótimo trabalho!* ✨\n"
    return out


def render_day_summary(notes: List[Note], date: str) -> str:
    """Monta o documento Markdown do dia `date` (AAAA-MM-DD) a partir de `notes`.

    A data não aparece no corpo: o título com a data fica na nota de resumo.
    """
    metrics = calculate_metrics(notes)
    by_period = group_by_period(notes)

    out = render_dashboard(metrics)
    out += "\n---\n\n"
    out += "# ⏰ Linha do Tempo\n\n"
    for slot in TIME_SLOTS:
        period_notes = by_period.get(slot.label) or []
        if period_notes:
            out += render_period(slot, period_notes)
    out += "---\n\n"
    out += render_pending(notes)
    out += "\n---\n\n"
    out += render_insights(notes, metrics)
    return out
