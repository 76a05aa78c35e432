import pytest

LAYER_ORDER = ("unit", "contract", "integration", "e2e")


def pytest_configure(config):
    """注册分层标记"""
    config.addinivalue_line("markers", "unit: 纯函数与单个模块")
    config.addinivalue_line("markers", "contract: 对外数据结构的形状")
    config.addinivalue_line("markers", "integration: 购物车会话与存储协作")
    config.addinivalue_line("markers", "e2e: 下单全流程")
    config.addinivalue_line("markers", "slow: 慢测试，prod 环境跳过")


def pytest_collection_modifyitems(config, items):
    """prod 环境跳过慢测试，并按层级排序"""
    if config.getoption("--env") == "prod":
        for item in items:
            if item.get_closest_marker("slow"):
                item.add_marker(pytest.mark.skip(reason="生产环境跳过慢测试"))

    def item_priority(item):
        markers = [m.name for m in item.iter_markers()]
        for i, layer in enumerate(LAYER_ORDER):
            if layer in markers:
                return i
        return len(LAYER_ORDER)

    items.sort(key=item_priority)


def pytest_terminal_summary(terminalreporter, exitstatus):
    terminalreporter.write_sep("=", "自定义摘要: 用例统计")
    counts = terminalreporter.stats
    passed = len(counts.get("passed", []))
    failed = len(counts.get("failed", []))
    skipped = len(counts.get("skipped", []))
    terminalreporter.write_line(f"通过: {passed}  失败: {failed}  跳过: {skipped}")
