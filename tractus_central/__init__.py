# Tractus - Sistema de Gestão

# MySQL em produção: usar PyMySQL (mysqlclient exige compilação e Python.h)
import pymysql

pymysql.install_as_MySQLdb()
