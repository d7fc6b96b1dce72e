"""
Auction Analysis Report - PDF

Renders one analysed auction round as a printable report for the trainee.
Uses ReportLab with the built-in Korean CID font so labels and risk flags
print without bundling font files. Documents are built with invariant=True:
the same analysis always produces the same bytes.

Output Structure:
1. Header (case, property, policy version)
2. Property
3. Valuation
4. Rights & Occupants
5. Costs & Profit by holding period
6. Round Summary
7. Bid Result (score, outcome, competitor bids) when a bid was submitted
"""

import logging
from io import BytesIO
from pathlib import Path
from typing import List, Optional

from reportlab.lib import colors
from reportlab.lib.enums import TA_LEFT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.pdfgen import canvas
from reportlab.platypus import (
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from auction.analysis.models import AuctionAnalysisResult
from auction.analyzer import BidRound
from auction.models import Horizon
from utils.formatting import format_eok, format_percent, format_won


logger = logging.getLogger(__name__)


# Built-in Korean Gothic font shipped with ReportLab
FONT_NAME = "HYGothic-Medium"
pdfmetrics.registerFont(UnicodeCIDFont(FONT_NAME))


# =============================================================================
# Color Palette
# =============================================================================

class Palette:
    """Print-friendly palette: charcoal text, muted accents."""
    BLACK = colors.Color(0.1, 0.1, 0.1)
    CHARCOAL = colors.Color(0.2, 0.2, 0.22)
    SLATE = colors.Color(0.35, 0.38, 0.42)
    GRAY = colors.Color(0.5, 0.5, 0.5)
    LIGHT_GRAY = colors.Color(0.85, 0.85, 0.85)
    PALE_GRAY = colors.Color(0.95, 0.95, 0.95)
    WHITE = colors.white

    ACCENT = colors.Color(0.15, 0.25, 0.4)

    SUCCESS = colors.Color(0.15, 0.4, 0.25)
    WARNING = colors.Color(0.5, 0.4, 0.15)
    DANGER = colors.Color(0.55, 0.15, 0.15)


# =============================================================================
# Style Configuration
# =============================================================================

def get_report_styles():
    """Paragraph styles for the analysis report."""
    styles = getSampleStyleSheet()

    styles.add(ParagraphStyle(
        name='ReportTitle',
        parent=styles['Normal'],
        fontSize=18,
        leading=24,
        textColor=Palette.CHARCOAL,
        alignment=TA_LEFT,
        fontName=FONT_NAME,
        spaceAfter=4*mm,
    ))

    styles.add(ParagraphStyle(
        name='ReportSubtitle',
        parent=styles['Normal'],
        fontSize=10,
        leading=14,
        textColor=Palette.SLATE,
        fontName=FONT_NAME,
        spaceAfter=6*mm,
    ))

    styles.add(ParagraphStyle(
        name='SectionTitle',
        parent=styles['Normal'],
        fontSize=13,
        leading=17,
        textColor=Palette.ACCENT,
        fontName=FONT_NAME,
        spaceBefore=14,
        spaceAfter=8,
    ))

    styles.add(ParagraphStyle(
        name='Body',
        parent=styles['Normal'],
        fontSize=9,
        leading=13,
        textColor=Palette.CHARCOAL,
        fontName=FONT_NAME,
    ))

    styles.add(ParagraphStyle(
        name='Flag',
        parent=styles['Normal'],
        fontSize=9,
        leading=13,
        textColor=Palette.DANGER,
        fontName=FONT_NAME,
    ))

    styles.add(ParagraphStyle(
        name='Note',
        parent=styles['Normal'],
        fontSize=7.5,
        leading=10,
        textColor=Palette.GRAY,
        fontName=FONT_NAME,
    ))

    return styles


def _table_style(header: bool = True) -> TableStyle:
    commands = [
        ('FONTNAME', (0, 0), (-1, -1), FONT_NAME),
        ('FONTSIZE', (0, 0), (-1, -1), 8.5),
        ('TEXTCOLOR', (0, 0), (-1, -1), Palette.CHARCOAL),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('GRID', (0, 0), (-1, -1), 0.5, Palette.LIGHT_GRAY),
        ('TOPPADDING', (0, 0), (-1, -1), 2*mm),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 2*mm),
        ('LEFTPADDING', (0, 0), (-1, -1), 2*mm),
        ('RIGHTPADDING', (0, 0), (-1, -1), 2*mm),
    ]
    if header:
        commands += [
            ('BACKGROUND', (0, 0), (-1, 0), Palette.CHARCOAL),
            ('TEXTCOLOR', (0, 0), (-1, 0), Palette.WHITE),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [Palette.WHITE, Palette.PALE_GRAY]),
            ('ALIGN', (1, 0), (-1, -1), 'RIGHT'),
        ]
    else:
        commands += [
            ('BACKGROUND', (0, 0), (0, -1), Palette.PALE_GRAY),
            ('ALIGN', (1, 0), (1, -1), 'RIGHT'),
        ]
    return TableStyle(commands)


# =============================================================================
# Report Generator Class
# =============================================================================

class ReportGenerator:
    """
    Generates auction analysis PDFs.

    Usage:
        generator = ReportGenerator(output_dir="reports")
        path = generator.generate_report(result, bid_round)
    """

    PAGE_WIDTH, PAGE_HEIGHT = A4
    MARGIN_LEFT = 18*mm
    MARGIN_RIGHT = 18*mm
    MARGIN_TOP = 18*mm
    MARGIN_BOTTOM = 22*mm

    OUTPUT_DIR = Path("reports")

    def __init__(self, output_dir: Optional[Path] = None):
        """Initialize the report generator with styles."""
        self.styles = get_report_styles()
        self.output_dir = Path(output_dir) if output_dir else self.OUTPUT_DIR

    def generate_report(
        self,
        result: AuctionAnalysisResult,
        bid_round: Optional[BidRound] = None,
    ) -> Path:
        """
        Write the report for a round to the output directory.

        Args:
            result: Analysis result
            bid_round: Submitted bid (score, outcome) to include, if any

        Returns:
            Path of the written PDF
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / f"auction-{result.property.id}.pdf"

        output_path.write_bytes(self.generate_to_buffer(result, bid_round))
        logger.info("Report written to %s", output_path)
        return output_path

    def generate_to_buffer(
        self,
        result: AuctionAnalysisResult,
        bid_round: Optional[BidRound] = None,
    ) -> bytes:
        """Generate PDF and return as bytes (for testing or streaming)."""
        buffer = BytesIO()
        self._build_document(result, bid_round, buffer)
        return buffer.getvalue()

    def _build_document(
        self,
        result: AuctionAnalysisResult,
        bid_round: Optional[BidRound],
        buffer: BytesIO,
    ):
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=self.MARGIN_LEFT,
            rightMargin=self.MARGIN_RIGHT,
            topMargin=self.MARGIN_TOP,
            bottomMargin=self.MARGIN_BOTTOM,
            title=f"Auction Analysis - {result.property.id}",
            author="Auction Trainer",
            subject="Foreclosure auction round analysis",
            invariant=True,
        )

        story = []
        story.extend(self._build_header(result))
        story.extend(self._build_property(result))
        story.extend(self._build_valuation(result))
        story.extend(self._build_rights(result))
        story.extend(self._build_profit(result))
        story.extend(self._build_summary(result))
        if bid_round is not None:
            story.extend(self._build_bid_result(bid_round))

        doc.build(story, onFirstPage=self._draw_footer, onLaterPages=self._draw_footer)

    def _draw_footer(self, canvas_obj: canvas.Canvas, doc):
        canvas_obj.saveState()
        canvas_obj.setFont(FONT_NAME, 7)
        canvas_obj.setFillColor(Palette.GRAY)
        canvas_obj.drawString(
            self.MARGIN_LEFT,
            self.MARGIN_BOTTOM - 10*mm,
            "교육용 시뮬레이션 - 법률 자문이 아닙니다",
        )
        canvas_obj.drawRightString(
            self.PAGE_WIDTH - self.MARGIN_RIGHT,
            self.MARGIN_BOTTOM - 10*mm,
            f"{doc.page}",
        )
        canvas_obj.restoreState()

    # =========================================================================
    # Sections
    # =========================================================================

    def _key_value_table(self, rows: List[List[str]]) -> Table:
        table = Table(rows, colWidths=[60*mm, 110*mm])
        table.setStyle(_table_style(header=False))
        return table

    def _build_header(self, result: AuctionAnalysisResult) -> list:
        case = result.court_docs.case_number if result.court_docs else "사건번호 없음"
        return [
            Paragraph("경매 분석 리포트", self.styles['ReportTitle']),
            Paragraph(
                f"{case} · {result.property.address} · 정책 v{result.policy_version} · "
                f"{result.summary.generated_at.strftime('%Y-%m-%d %H:%M')}",
                self.styles['ReportSubtitle'],
            ),
        ]

    def _build_property(self, result: AuctionAnalysisResult) -> list:
        prop = result.property
        rows = [
            ["유형", f"{prop.type.value} ({prop.category.value})"],
            ["전용면적", f"{prop.size_m2:,.1f} m²"],
            ["준공연도", str(prop.year_built)],
            ["층", f"{prop.floor_info.current} / {prop.floor_info.total}"],
            ["회차", f"{prop.auction_step}회차"],
            ["난이도", prop.difficulty.value],
        ]
        return [
            Paragraph("물건 정보", self.styles['SectionTitle']),
            self._key_value_table(rows),
        ]

    def _build_valuation(self, result: AuctionAnalysisResult) -> list:
        valuation = result.valuation
        rec = valuation.recommended_bid_range
        rows = [
            ["감정가", f"{format_won(valuation.appraisal_value)} ({format_eok(valuation.appraisal_value)})"],
            ["시세(FMV)", format_won(valuation.adjusted_fmv)],
            ["최저입찰가", format_won(valuation.min_bid)],
            ["권장 입찰가", f"{format_won(rec.min)} ~ {format_won(rec.max)}"],
        ]
        elements = [
            Paragraph("가치 평가", self.styles['SectionTitle']),
            self._key_value_table(rows),
        ]
        for note in valuation.notes:
            elements.append(Paragraph(note, self.styles['Note']))
        return elements

    def _build_rights(self, result: AuctionAnalysisResult) -> list:
        rights = result.rights
        elements = [Paragraph("권리 · 점유 분석", self.styles['SectionTitle'])]

        if not rights.breakdown:
            elements.append(Paragraph("등록된 권리 및 점유자 정보가 없습니다.", self.styles['Body']))
        else:
            rows = [["구분", "권리", "인수", "인수금액", "위험도"]]
            for line in rights.breakdown:
                rows.append([
                    "등기" if line.source == "registry" else "점유",
                    line.label if line.classified else f"{line.label} ({line.raw_type})",
                    "O" if line.inheritable else "-",
                    format_won(line.payout),
                    f"{line.risk}/5",
                ])
            table = Table(rows, colWidths=[20*mm, 70*mm, 15*mm, 40*mm, 25*mm])
            table.setStyle(_table_style())
            elements.append(table)

        elements.append(Spacer(1, 6))
        elements.append(self._key_value_table([
            ["인수 권리 합계", format_won(rights.assumable_rights_total)],
            ["예상 명도비", format_won(rights.eviction_cost_estimated)],
            ["명도 위험도", format_percent(rights.eviction_risk, 0)],
        ]))

        for flag in rights.risk_flags:
            elements.append(Paragraph(f"! {flag}", self.styles['Flag']))
        for warning in rights.warnings:
            elements.append(Paragraph(warning, self.styles['Note']))
        return elements

    def _build_profit(self, result: AuctionAnalysisResult) -> list:
        acquisition = result.costs.acquisition
        elements = [
            Paragraph("비용 · 수익 (입찰가 기준)", self.styles['SectionTitle']),
            self._key_value_table([
                ["입찰가", format_won(acquisition.bid)],
                ["취득세", format_won(acquisition.taxes)],
                ["법무비", format_won(acquisition.legal_fees)],
                ["수리비", format_won(acquisition.repair_cost)],
                ["총 취득비용", format_won(acquisition.total_acquisition)],
                ["대출 / 자기자본", f"{format_won(acquisition.loan_principal)} / "
                                   f"{format_won(acquisition.own_cash)}"],
            ]),
            Spacer(1, 8),
        ]

        rows = [["보유기간", "매각가", "총비용", "순이익", "ROI", "연환산 ROI"]]
        for horizon in Horizon:
            scenario = result.profit.scenarios[horizon]
            rows.append([
                f"{horizon.months}개월",
                format_won(scenario.exit_price),
                format_won(scenario.total_cost),
                format_won(scenario.net_profit),
                format_percent(scenario.roi),
                format_percent(scenario.annualized_roi),
            ])
        table = Table(rows, colWidths=[20*mm, 32*mm, 32*mm, 32*mm, 24*mm, 30*mm])
        table.setStyle(_table_style())
        elements.append(table)
        elements.append(Paragraph(
            f"초기 안전마진 {format_percent(result.profit.initial_safety_margin)}",
            self.styles['Body'],
        ))
        return elements

    def _build_summary(self, result: AuctionAnalysisResult) -> list:
        summary = result.summary
        return [
            Paragraph("종합 평가", self.styles['SectionTitle']),
            self._key_value_table([
                ["투자 등급", summary.grade.value],
                ["위험 수준", summary.risk_label.value],
                ["수익 여부", "수익" if summary.is_profitable else "손실"],
                ["최적 보유기간", f"{summary.best_holding_period.months}개월"],
            ]),
        ]

    def _build_bid_result(self, bid_round: BidRound) -> list:
        outcome_labels = {"win": "낙찰", "lose": "패찰", "overpay": "고가 낙찰"}
        rows = [
            ["입찰가", format_won(bid_round.user_bid)],
            ["결과", outcome_labels.get(bid_round.outcome.value, bid_round.outcome.value)],
            ["경쟁 입찰", ", ".join(format_won(b) for b in bid_round.competitor_bids) or "-"],
        ]
        if bid_round.score is not None:
            score = bid_round.score
            rows += [
                ["점수", f"{score.final_score} / 1000 ({score.grade.value})"],
                ["정확도 / 수익성 / 리스크",
                 f"{score.accuracy_score} / {score.profitability_score} / "
                 f"{score.risk_control_score}"],
                ["획득 경험치", f"+{score.exp_gain} EXP"],
            ]
        else:
            rows.append(["점수", bid_round.score_error or "점수 없음"])

        return [
            Paragraph("입찰 결과", self.styles['SectionTitle']),
            self._key_value_table(rows),
        ]


# =============================================================================
# Convenience Function
# =============================================================================

def generate_report(
    result: AuctionAnalysisResult,
    bid_round: Optional[BidRound] = None,
    output_dir: Optional[Path] = None,
) -> Path:
    """
    Generate an analysis report PDF.

    Args:
        result: Analysis result
        bid_round: Submitted bid to include, if any
        output_dir: Directory for the PDF (default: reports/)

    Returns:
        Path of the written PDF
    """
    return ReportGenerator(output_dir=output_dir).generate_report(result, bid_round)
