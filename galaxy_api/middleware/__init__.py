# _*_ coding: utf-8 _*_
