"""
Streamlit을 기반으로 하는 도도부현 유사도 뷰어의 사용자 인터페이스 모듈입니다.
데이터 문서를 한 번 로드하고, 선택한 도도부현의 파이 차트와 가장 유사한 도도부현을 표시합니다.
"""
import streamlit as st
import pandas as pd
import plotly.express as px
from typing import List, Tuple
import os
import sys
from urllib.parse import urljoin

# 프로젝트 루트 디렉토리를 sys.path에 추가하여 모듈 임포트 가능하게 함
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.abspath(os.path.join(current_dir, '..', '..'))
sys.path.insert(0, project_root)

from src.core.config import DATA_BASE_URL, get_data_url, is_remote_location
from src.core.data_loader import PrefectureDataLoader, LoadResult
from src.core.similarity_analyzer import SimilarityAnalyzer
from src.utils.helpers import format_score

# --- Streamlit 앱 설정 ---
st.set_page_config(
    page_title="도도부현 유사도 뷰어",
    page_icon="🗾",
    layout="wide",
    initial_sidebar_state="expanded"
)

# --- CSS 스타일링 ---
st.markdown("""
<style>
.main-header {
    font-size: 2.5em;
    font-weight: bold;
    color: #007bff;
    text-align: center;
    margin-bottom: 1.5em;
    border-bottom: 2px solid #007bff;
    padding-bottom: 0.5em;
}
.similar-card {
    background-color: #f0f2f6;
    border-radius: 10px;
    padding: 1rem 1.5rem;
    margin-bottom: 1rem;
    box-shadow: 0 2px 8px rgba(0,0,0,0.1);
    border-left: 8px solid #28a745;
}
.similar-card h3 {
    color: #28a745;
    margin-top: 0;
    margin-bottom: 0.5rem;
}
.score-badge {
    display: inline-block;
    background-color: #007bff;
    color: white;
    padding: 0.25rem 0.75rem;
    border-radius: 15px;
    font-size: 0.85rem;
    font-weight: bold;
}
</style>
""", unsafe_allow_html=True)

# --- 전역 변수 및 캐싱 ---
@st.cache_resource
def load_data() -> Tuple[PrefectureDataLoader, LoadResult]:
    """프로세스 시작 시 데이터를 한 번 로드하고 로더와 로드 결과를 캐싱합니다."""
    loader = PrefectureDataLoader()
    return loader, loader.load_data()

@st.cache_resource
def load_analyzer(_loader: PrefectureDataLoader):
    """유사도 분석기를 생성하고 캐싱합니다. 행렬이 없거나 잘못되면 None."""
    matrix = _loader.get_similarity_matrix()
    if not matrix:
        return None
    prefectures = _loader.get_prefectures()
    names = prefectures if len(prefectures) == len(matrix) else None
    try:
        return SimilarityAnalyzer(matrix, names)
    except ValueError as e:
        st.error(f"❌ 유사도 행렬을 사용할 수 없습니다: {e}")
        return None

def resolve_image(path: str) -> str:
    """이미지 상대 경로를 데이터 기준 위치에 맞춰 URL 또는 파일 경로로 변환합니다."""
    if is_remote_location(DATA_BASE_URL):
        base = DATA_BASE_URL if DATA_BASE_URL.endswith("/") else DATA_BASE_URL + "/"
        return urljoin(base, path)
    return os.path.join(DATA_BASE_URL, path)

def show_image(path: str, caption: str):
    """이미지를 표시합니다. 로컬 파일이 없으면 경고를 표시합니다."""
    location = resolve_image(path)
    if not is_remote_location(location) and not os.path.exists(location):
        st.warning(f"⚠️ 이미지 파일이 없습니다: {path}")
        return
    st.image(location, caption=caption, use_container_width=True)

# --- 사이드바 메뉴 구성 ---
def render_sidebar(loader: PrefectureDataLoader, result: LoadResult):
    """사이드바 메뉴와 데이터 상태를 표시하고 선택된 메뉴를 반환합니다."""
    st.sidebar.markdown("## 🎯 메뉴")

    if 'selected_menu' not in st.session_state:
        st.session_state.selected_menu = "prefecture"

    menu_items = {
        "🗾 도도부현 보기": "prefecture",
        "📈 유사도 분석": "similarity",
        "❓ 도움말": "help",
    }

    for menu_name, menu_value in menu_items.items():
        is_selected = st.session_state.selected_menu == menu_value
        if st.sidebar.button(menu_name, key=f"menu_{menu_value}", use_container_width=True,
                             type="primary" if is_selected else "secondary"):
            st.session_state.selected_menu = menu_value
            st.query_params.page = menu_value
            st.rerun()

    # 데이터 상태 표시
    st.sidebar.markdown("---")
    st.sidebar.markdown("### ⚙️ 데이터 상태")
    st.sidebar.caption(get_data_url())

    if loader.state.is_loaded():
        st.sidebar.success(f"✅ {len(loader.get_prefectures())}개 도도부현 로드 완료")
    elif result.error is not None:
        st.sidebar.error(f"❌ 데이터 로드 실패: {result.error}")
    else:
        st.sidebar.info("데이터가 아직 로드되지 않았습니다.")

    return st.session_state.selected_menu

# --- UI 컴포넌트 함수 ---
def display_similar_card(name: str, score: float, rank: int, image_pair: List[str]):
    """유사 도도부현 하나를 카드 형태로 표시합니다."""
    st.markdown(f"""
    <div class="similar-card">
        <h3>🏆 {rank}. {name}</h3>
        <span class="score-badge">유사도: {format_score(score)}</span>
    </div>
    """, unsafe_allow_html=True)
    if image_pair:
        show_image(image_pair[0], name)

# --- 각 페이지 렌더링 함수들 ---
def render_prefecture_page(loader: PrefectureDataLoader, analyzer):
    """도도부현 보기 페이지를 렌더링합니다."""
    prefectures = loader.get_prefectures()
    if not prefectures:
        st.info("표시할 도도부현 데이터가 없습니다.")
        return

    selected = st.selectbox("도도부현을 선택하세요:", prefectures)
    index = prefectures.index(selected)
    image_paths = loader.get_image_paths()
    pair = image_paths[index] if index < len(image_paths) else []

    st.markdown(f"### 🥧 {selected}")
    if pair:
        col1, col2 = st.columns(2)
        with col1:
            show_image(pair[0], "구성 비율")
        with col2:
            show_image(pair[1], "라벨")

    st.markdown("### 🔍 가장 유사한 도도부현")
    if analyzer is None:
        st.info("유사도 행렬이 없어 유사 도도부현을 계산할 수 없습니다.")
        return

    try:
        similar = analyzer.most_similar(index)
    except IndexError as e:
        st.warning(f"⚠️ 유사 도도부현을 계산할 수 없습니다: {e}")
        return

    scores = dict(analyzer.ranked_scores(index))
    cols = st.columns(len(similar))
    for rank, (col, other) in enumerate(zip(cols, similar), start=1):
        with col:
            other_pair = image_paths[other] if other < len(image_paths) else []
            other_name = prefectures[other] if other < len(prefectures) else str(other)
            display_similar_card(other_name, scores[other], rank, other_pair)

def render_similarity_page(loader: PrefectureDataLoader, analyzer):
    """유사도 분석 페이지를 렌더링합니다."""
    st.markdown("### 📈 유사도 분석")

    if analyzer is None:
        st.info("유사도 행렬이 없습니다.")
        return

    stats = loader.get_data_statistics()
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("도도부현 수", stats['prefecture_count'])
    with col2:
        st.metric("평균 유사도", format_score(stats.get('similarity_mean', 0.0)))
    with col3:
        st.metric("최대 유사도", format_score(stats.get('similarity_max', 0.0)))
    with col4:
        st.metric("최소 유사도", format_score(stats.get('similarity_min', 0.0)))

    df = analyzer.to_dataframe()

    # 히트맵
    fig_heatmap = px.imshow(
        df,
        color_continuous_scale='Blues',
        title='도도부현 간 유사도 행렬',
        labels={'color': '유사도'}
    )
    st.plotly_chart(fig_heatmap, use_container_width=True)

    # 선택한 행의 유사도 순위
    labels = list(df.index)
    selected = st.selectbox("기준 도도부현:", labels)
    index = labels.index(selected)
    ranked = analyzer.ranked_scores(index)
    ranked_df = pd.DataFrame(
        [{'도도부현': labels[column], '유사도': score} for column, score in ranked]
    )

    col1, col2 = st.columns(2)
    with col1:
        st.dataframe(ranked_df, use_container_width=True, hide_index=True)
    with col2:
        fig_bar = px.bar(
            ranked_df,
            x='유사도',
            y='도도부현',
            orientation='h',
            title=f'{selected} 기준 유사도 순위',
        )
        fig_bar.update_layout(yaxis={'categoryorder': 'total ascending'})
        st.plotly_chart(fig_bar, use_container_width=True)

def render_help_page():
    """도움말 페이지를 렌더링합니다."""
    st.markdown("### ❓ 도움말")

    st.markdown("""
    #### 🗾 도도부현 유사도 뷰어 사용법

    **1. 🗾 도도부현 보기**
    - 도도부현을 선택하면 파이 차트와 라벨 이미지를 표시합니다
    - 유사도 행렬을 기준으로 가장 유사한 도도부현 2곳을 함께 보여줍니다

    **2. 📈 유사도 분석**
    - 전체 유사도 행렬을 히트맵으로 확인할 수 있습니다
    - 기준 도도부현을 선택하면 다른 도도부현과의 유사도 순위를 확인할 수 있습니다

    #### 💡 데이터 형식

    - `data/data.json`의 `prefectures`: 도도부현 이름 목록
    - `image_paths`: 없으면 `figs/pie_00_이름.png` 규칙으로 자동 생성됩니다
    - `similarity_matrix`: 정방 행렬 형태의 유사도 점수

    #### 🔧 설정

    - `DATA_BASE_URL`: 데이터 문서 기준 위치 (URL 또는 로컬 디렉토리)
    - `REQUEST_TIMEOUT`: HTTP 요청 타임아웃(초)
    """)

# --- URL 라우팅 함수 ---
def get_page_from_url():
    """URL 쿼리 파라미터에서 페이지 정보를 가져옵니다."""
    page = st.query_params.get("page", "prefecture")

    valid_pages = ["prefecture", "similarity", "help"]
    if page not in valid_pages:
        page = "prefecture"

    return page

# --- 메인 애플리케이션 함수 ---
def main():
    """Streamlit 애플리케이션의 메인 함수입니다."""
    url_page = get_page_from_url()

    if 'selected_menu' not in st.session_state:
        st.session_state.selected_menu = url_page

    st.markdown("<h1 class='main-header'>🗾 도도부현 유사도 뷰어</h1>", unsafe_allow_html=True)

    loader, result = load_data()
    analyzer = load_analyzer(loader)

    selected_page = render_sidebar(loader, result)

    if selected_page != url_page:
        st.query_params.page = selected_page

    st.markdown("---")

    if selected_page == "prefecture":
        render_prefecture_page(loader, analyzer)
    elif selected_page == "similarity":
        render_similarity_page(loader, analyzer)
    elif selected_page == "help":
        render_help_page()

if __name__ == "__main__":
    main()
