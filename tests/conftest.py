import pytest

USER_DDL = """\
/*
 Navicat MySQL Data Transfer

 `ghost` int NOT NULL,
 Date: 2021-06-01
*/

SET NAMES utf8mb4;
SET FOREIGN_KEY_CHECKS = 0;

-- ----------------------------
-- Table structure for user_info
-- ----------------------------
DROP TABLE IF EXISTS `user_info`;
CREATE TABLE `user_info` (
  `id` int unsigned NOT NULL AUTO_INCREMENT COMMENT '主键',
  `name` varchar(64) NOT NULL DEFAULT '' COMMENT 'user name',
  `nick` varchar(64) DEFAULT NULL,
  `balance` decimal(10,2) NOT NULL DEFAULT '0.00',
  `is_admin` tinyint(1) NOT NULL DEFAULT '0',
  `age` smallint unsigned DEFAULT NULL,
  `tenant_id` bigint NOT NULL,
  `extra` json DEFAULT NULL,
  `created_at` datetime NOT NULL DEFAULT CURRENT_TIMESTAMP,
  `updated_at` timestamp NULL DEFAULT NULL ON UPDATE CURRENT_TIMESTAMP,
  `location` point DEFAULT NULL,
  PRIMARY KEY (`id`),
  UNIQUE KEY `uk_tenant_name` (`tenant_id`,`name`) COMMENT 'x',
  KEY `idx_created` (`created_at`),
  KEY `idx_ghost` (`ghost`)
) ENGINE=InnoDB AUTO_INCREMENT=10 DEFAULT CHARSET=utf8mb4 COMMENT='用户表';

SET FOREIGN_KEY_CHECKS = 1;
"""


@pytest.fixture
def user_ddl() -> str:
    return USER_DDL


@pytest.fixture
def user_ddl_file(tmp_path):
    p = tmp_path / "user_info.sql"
    p.write_text(USER_DDL, encoding="utf-8")
    return p
