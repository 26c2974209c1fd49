from django.db import models


class SendLog(models.Model):
    """发信审计日志"""
    id = models.BigAutoField(primary_key=True)

    # 发件人（邮箱地址）
    username = models.CharField(max_length=255, db_index=True)

    # 收件人（To/Cc/Bcc，逗号分隔）
    recipients = models.TextField(default='')

    # 主题
    subject = models.CharField(max_length=255, default='')

    # Message-ID
    message_id = models.CharField(max_length=255, default='')

    # 创建时间（UNIX时间戳，毫秒）
    ct = models.BigIntegerField(default=0, db_index=True)

    class Meta:
        db_table = "webmail_send_log"
