"""
Director OS
Demo dataset shared by the server seeder and the persisted local store.

Everything here is in wire shape (camelCase dicts). Callers must deep-copy
before mutating; ``seed_copy()`` does that.
"""

import copy

SEED_USERS = [
    {
        "id": "u1",
        "username": "director",
        "name": "Alex Director",
        "role": "DIRECTOR",
        "avatarUrl": "https://ui-avatars.com/api/?name=Alex+Director&background=0D8ABC&color=fff",
        "assignedProjectCodes": [],
    },
    {
        "id": "u2",
        "username": "pm",
        "name": "Sarah PM",
        "role": "PM",
        "avatarUrl": "https://ui-avatars.com/api/?name=Sarah+PM&background=6366f1&color=fff",
        "assignedProjectCodes": ["Project_Alpha", "Project_Sierra"],
    },
]

SEED_PMS = [
    {"id": "pm-1", "name": "王莎拉 (Sarah)", "level": "高级项目经理",
     "tags": ["运营强", "危机管理"], "customFields": {}},
    {"id": "pm-2", "name": "张伟 (John)", "level": "初级项目经理",
     "tags": ["技术控", "沟通较弱"], "customFields": {}},
    {"id": "pm-3", "name": "陈艾米 (Emily)", "level": "业务总监",
     "tags": ["战略思维", "创新领头人"], "customFields": {}},
]

SEED_PROJECTS = [
    {"id": "proj-1", "projectName": "招商银行 BPO", "projectCode": "Project_Alpha",
     "businessType": "BPO", "pmId": "pm-1", "profitTargetRate": 0.20,
     "slaTargetRate": 0.95, "status": "Running", "customFields": {}},
    {"id": "proj-2", "projectName": "特斯拉客服支持", "projectCode": "Project_Tango",
     "businessType": "RPO", "pmId": "pm-2", "profitTargetRate": 0.15,
     "slaTargetRate": 0.98, "status": "Ramp-up", "customFields": {}},
    {"id": "proj-3", "projectName": "Shopee 物流客服", "projectCode": "Project_Sierra",
     "businessType": "BPO", "pmId": "pm-1", "profitTargetRate": 0.10,
     "slaTargetRate": 0.99, "status": "Running", "customFields": {}},
    {"id": "proj-4", "projectName": "字节跳动内容审核", "projectCode": "Project_Gemma",
     "businessType": "HRO", "pmId": "pm-3", "profitTargetRate": 0.25,
     "slaTargetRate": 0.995, "status": "Running", "customFields": {}},
]

SEED_METRICS = [
    # revenue 10% under target -> revenue risk
    {"id": "met-1", "projectCode": "Project_Alpha", "reportWeek": "2023-10-23",
     "revenueActual": 45000, "revenueTarget": 50000, "headcount": 120,
     "slaAchieved": 0.96, "turnoverRate": 0.02, "riskFlag": False,
     "riskDetails": "因呼入量低于预测，导致营收未达标。"},
    # SLA 0.92 < 0.98 target
    {"id": "met-2", "projectCode": "Project_Tango", "reportWeek": "2023-10-23",
     "revenueActual": 15500, "revenueTarget": 15000, "headcount": 45,
     "slaAchieved": 0.92, "turnoverRate": 0.05, "riskFlag": True,
     "riskDetails": "关键系统宕机导致 SLA 违规。"},
    {"id": "met-3", "projectCode": "Project_Sierra", "reportWeek": "2023-10-23",
     "revenueActual": 82000, "revenueTarget": 80000, "headcount": 300,
     "slaAchieved": 0.992, "turnoverRate": 0.01, "riskFlag": False,
     "riskDetails": ""},
    # manual flag only
    {"id": "met-4", "projectCode": "Project_Gemma", "reportWeek": "2023-10-23",
     "revenueActual": 120000, "revenueTarget": 120000, "headcount": 150,
     "slaAchieved": 0.999, "turnoverRate": 0.005, "riskFlag": True,
     "riskDetails": "客户潜在政策变更风险。"},
]

SEED_TASKS = [
    {"id": "task-1", "taskName": "财务 RPA 机器人", "stage": "Testing", "progressPercent": 90},
    {"id": "task-2", "taskName": "智能质检系统", "stage": "In Progress", "progressPercent": 45},
    {"id": "task-3", "taskName": "新 HR 门户上线", "stage": "Blocked", "progressPercent": 20,
     "blockerNotes": "等待 IT 安全审批"},
    {"id": "task-4", "taskName": "语音 AI 客服试点", "stage": "Backlog", "progressPercent": 0},
]

SEED_CONFIG = {
    "riskThresholds": {
        "revenueGap": 0.05,
        "turnoverRate": 0.10,
    },
    "resources": {
        "templateUrl": "https://example.com/templates/weekly_report_v2.xlsx",
        "guideUrl": "https://example.com/docs/director_os_handbook.pdf",
    },
    "maintenanceMode": False,
}


def seed_copy(data):
    """Return a deep copy of a seed collection so callers can mutate it."""
    return copy.deepcopy(data)
