import json
import os
import sys
from typing import Any, Dict, List

import streamlit as st

# 导入后端模块
from src.config import ConfigFileError, JsonTableConfigSource, load_app_settings, load_settings
from src.core import DatabaseConnector, MySqlGateway
from src.services import DatabaseGenerator, DatabaseResult, resolve_output_paths, run_batch_sync
from src.utils import setup_logger

settings = load_settings()
logger = setup_logger("streamlit_app", settings.log_level)

# --- 配置文件管理 ---
PROFILE_FILE = "sqlinfogen_profile.json"


def get_app_dir():
    """获取应用程序运行目录 (兼容 .exe 和 .py)"""
    if getattr(sys, 'frozen', False):
        return os.path.dirname(sys.executable)
    return os.path.dirname(os.path.abspath(__file__))


def load_last_profile() -> Dict[str, Any]:
    """加载最后一次使用的配置"""
    file_path = os.path.join(get_app_dir(), PROFILE_FILE)
    if not os.path.exists(file_path):
        return {}
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("无法加载配置文件: %s", e)
        return {}


def save_current_profile(profile_data: Dict[str, Any]):
    """保存当前配置"""
    file_path = os.path.join(get_app_dir(), PROFILE_FILE)
    try:
        with open(file_path, 'w', encoding='utf-8') as f:
            json.dump(profile_data, f, indent=4, ensure_ascii=False)
    except OSError as e:
        logger.warning("无法保存配置文件: %s", e)


# --- 页面配置 ---
st.set_page_config(
    page_title="数据库表信息文档生成器",
    page_icon="📄",
    layout="wide",
    initial_sidebar_state="expanded"
)


def init_session_state():
    """统一初始化 Session State"""
    defaults = {
        'settings_file': settings.settings_file,
        'max_concurrent': settings.max_concurrent_databases,
        'results': [],
        'has_loaded_profile': False,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value

    if not st.session_state.has_loaded_profile:
        last_profile = load_last_profile()
        for key in ('settings_file', 'max_concurrent'):
            if key in last_profile:
                st.session_state[key] = last_profile[key]
        st.session_state.has_loaded_profile = True


init_session_state()


def build_generator(settings_file: str) -> DatabaseGenerator:
    gateway = MySqlGateway()
    return DatabaseGenerator(
        schema_provider=gateway,
        query_executor=gateway,
        table_source=JsonTableConfigSource(),
        defaults=settings.defaults,
        base_dir=os.path.dirname(settings_file),
    )


def results_to_rows(results: List[DatabaseResult]) -> List[Dict[str, Any]]:
    """将生成结果转换为表格数据"""
    rows = []
    for r in results:
        written = sum(1 for t in r.tables if t.written)
        rows.append({
            '数据库': r.db,
            '状态': '✅ 成功' if r.success else '❌ 失败',
            '已生成表': f"{written}/{len(r.tables)}",
            '耗时(ms)': r.elapsed_ms,
            '配置文件': r.read_file_path,
            '输出文件': r.output_file_path,
            '错误信息': r.error or '',
        })
    return rows


# --- 侧边栏 ---
with st.sidebar:
    st.header("⚙️ 生成配置")
    st.text_input("任务配置文件", key='settings_file', help="包含 databases 数组的 JSON 文件")
    st.number_input("并发数量上限", min_value=1, max_value=64, step=1, key='max_concurrent')
    if st.button("💾 保存为默认配置"):
        save_current_profile({
            'settings_file': st.session_state.settings_file,
            'max_concurrent': int(st.session_state.max_concurrent),
        })
        st.success("已保存")

st.title("📄 数据库表信息文档生成器")

settings_file = os.path.abspath(st.session_state.settings_file)
try:
    configs = load_app_settings(settings_file)
except ConfigFileError as e:
    st.error(str(e))
    st.stop()

generator = build_generator(settings_file)
preview = [resolve_output_paths(cfg, settings.defaults, os.path.dirname(settings_file)) for cfg in configs]

st.subheader(f"数据库任务 ({len(configs)})")
st.dataframe(
    [{
        '数据库': cfg.db,
        '表配置文件': cfg.read_file_path,
        '输出文件': cfg.output_file_path,
    } for cfg in preview],
    use_container_width=True,
)

col_test, col_run = st.columns(2)
with col_test:
    if st.button("🔌 测试数据库连接", use_container_width=True):
        for cfg in configs:
            if not cfg.connection_string.strip():
                st.warning(f"{cfg.db}: 未配置 connection_string")
                continue
            try:
                connector = DatabaseConnector.from_connection_string(cfg.connection_string)
            except ValueError as e:
                st.error(f"{cfg.db}: {e}")
                continue
            if connector.try_connect():
                connector.disconnect()
                st.success(f"{cfg.db}: 连接成功")
            else:
                st.error(f"{cfg.db}: 连接失败，详情请查看日志")

with col_run:
    if st.button("🚀 开始生成", type="primary", use_container_width=True):
        with st.spinner("正在生成文档..."):
            st.session_state.results = run_batch_sync(configs, generator, int(st.session_state.max_concurrent))

results: List[DatabaseResult] = st.session_state.results
if results:
    st.subheader("生成结果")
    st.dataframe(results_to_rows(results), use_container_width=True)

    for r in results:
        if not r.success or not os.path.exists(r.output_file_path):
            continue
        with st.expander(f"预览: {r.db} ({os.path.basename(r.output_file_path)})"):
            skipped = [t for t in r.tables if not t.written]
            for t in skipped:
                st.warning(f"已跳过 {t.table}: {t.reason}")
            with open(r.output_file_path, 'r', encoding='utf-8') as f:
                content = f.read()
            st.markdown(content)
            st.download_button(
                "⬇️ 下载",
                data=content,
                file_name=os.path.basename(r.output_file_path),
                key=f"download_{r.db}_{r.output_file_path}",
            )
