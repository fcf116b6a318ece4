"""
System instructions and prompt template for the assessment task.
"""

from __future__ import annotations

from stockdesk.core.formatting import format_pct
from stockdesk.services.openai.contexts import AssessmentRequest


INSTRUCTIONS = """You are a senior equity research analyst at a top-tier hedge fund.

You MUST:
- Base the assessment on the live data provided.
- Be decisive: always choose exactly one rating, urgency and sell signal.
- Give every price level as a plain number in dollars.
- Output MUST be a single JSON object (no markdown, no commentary)."""


RESPONSE_SCHEMA = (
    '{"rating":"STRONG BUY"|"BUY"|"HOLD"|"SELL"|"STRONG SELL","targetPrice":N,'
    '"updownside":N,"thesis":"<2-3 sentences>","bullCase":"<1-2 sentences>",'
    '"bearCase":"<1-2 sentences>","keyRisks":["r1","r2","r3"],'
    '"catalysts":["c1","c2"],"technicalOutlook":"<brief>",'
    '"analystConsensus":"<brief>",'
    '"entryPoint":{"idealEntry":N,"entryLow":N,"entryHigh":N,'
    '"entryRationale":"<1 sentence>","entryCondition":"<specific signal>",'
    '"urgency":"IMMEDIATE"|"PATIENT"|"WAIT"},'
    '"holdStrategy":{"minimumHold":"<period>","optimalHold":"<period>",'
    '"holdRationale":"<1-2 sentences>","reviewTriggers":["t1","t2"],'
    '"positionSizing":"<% portfolio>"},'
    '"sellSentiment":{"sellSignal":"HOLD"|"TRIM"|"SELL"|"URGENT SELL",'
    '"sellTriggerPrice":N,"stopLoss":N,"profitTarget":N,'
    '"sellRationale":"<1-2 sentences>","redFlags":["f1","f2"],'
    '"currentSentiment":"<1 sentence>"}}'
)


def build_prompt(request: AssessmentRequest, as_of: str) -> str:
    """Render the assessment prompt for one instrument."""
    r = request
    return "\n".join([
        f"Assess {r.name} ({r.ticker}) as of {as_of}.",
        f"Live data: Price ${r.price} ({format_pct(r.pct_change)} today) "
        f"| Open ${r.open} | Hi ${r.high} | Lo ${r.low}",
        f"MktCap {r.mkt_cap} | P/E {r.pe}x | EPS ${r.eps} | Beta {r.beta} "
        f"| DivYield {r.div}% | 52W ${r.lo52}--${r.hi52} | Sector {r.sector}",
        "Reply ONLY with JSON (no markdown):",
        RESPONSE_SCHEMA,
    ])
