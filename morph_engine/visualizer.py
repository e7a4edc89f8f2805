"""
visualizer.py - 교배 결과 확률 차트
결과 목록을 가로 막대 그래프로 그려 base64 PNG로 반환
"""

import io
import base64
import platform
import numpy as np
from typing import List, Optional
from dataclasses import dataclass

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from .models import CombinedOutcome


# ============================================================
# 한글 폰트 설정 (시스템 자동 감지)
# ============================================================
def setup_korean_font():
    system = platform.system()
    if system == 'Windows':
        font_name = 'Malgun Gothic'
    elif system == 'Darwin':
        font_name = 'AppleGothic'
    else:
        font_name = 'NanumGothic'  # 리눅스/코랩 등

    # 폰트가 없으면 기본 폰트로 대체
    plt.rcParams['font.family'] = [font_name, 'DejaVu Sans']
    plt.rcParams['axes.unicode_minus'] = False
    return font_name


KOREAN_FONT = setup_korean_font()


@dataclass
class ChartConfig:
    fig_width: float = 9.0
    bar_height: float = 0.6
    row_height: float = 0.45     # 결과 1개당 세로 크기 (인치)
    min_fig_height: float = 2.5

    max_outcomes: int = 20       # 이보다 많으면 상위만 표시

    color_bar: str = '#A569BD'
    color_high: str = '#F39C12'  # 25% 이상
    high_threshold: float = 25.0
    edge_color: str = 'black'

    font_size_label: int = 10
    font_size_title: int = 13
    dpi: int = 150


class OutcomeVisualizer:
    def __init__(self, config: Optional[ChartConfig] = None):
        self.config = config or ChartConfig()

    def draw(
        self,
        outcomes: List[CombinedOutcome],
        title: str = "",
        save_path: Optional[str] = None
    ) -> str:
        cfg = self.config
        shown = outcomes[:cfg.max_outcomes]

        height = max(cfg.min_fig_height, cfg.row_height * len(shown) + 1.2)
        fig, ax = plt.subplots(figsize=(cfg.fig_width, height))

        # 위에서부터 확률 높은 순
        y = np.arange(len(shown))[::-1]
        probs = np.array([o.probability for o in shown], dtype=float)
        colors = [cfg.color_high if p >= cfg.high_threshold else cfg.color_bar for p in probs]

        if shown:
            ax.barh(y, probs, height=cfg.bar_height, color=colors,
                    edgecolor=cfg.edge_color, linewidth=0.8)

        for yi, o in zip(y, shown):
            ax.text(o.probability + 1.0, yi, f"{o.probability:g}%",
                    va='center', fontsize=cfg.font_size_label)

        ax.set_yticks(y)
        ax.set_yticklabels([o.display_name for o in shown], fontsize=cfg.font_size_label)
        ax.set_xlim(0, 110)
        ax.set_xlabel('%')

        for side in ('top', 'right'):
            ax.spines[side].set_visible(False)

        if title:
            ax.set_title(title, fontsize=cfg.font_size_title, fontweight='bold')

        if len(outcomes) > len(shown):
            ax.text(1.0, -0.12, f"외 {len(outcomes) - len(shown)}개 결과 생략",
                    transform=ax.transAxes, ha='right', fontsize=cfg.font_size_label - 2)

        plt.tight_layout()

        # 파일 저장
        if save_path:
            plt.savefig(save_path, dpi=cfg.dpi, bbox_inches='tight', facecolor='white')

        # 이미지 반환
        buf = io.BytesIO()
        plt.savefig(buf, format='png', dpi=cfg.dpi, bbox_inches='tight', facecolor='white')
        buf.seek(0)
        img_base64 = base64.b64encode(buf.read()).decode('utf-8')
        plt.close(fig)
        return img_base64

    def save_to_file(self, outcomes: List[CombinedOutcome], filepath: str, title: str = ""):
        """파일로 저장"""
        self.draw(outcomes, title=title, save_path=filepath)
